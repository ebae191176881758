from extbf.errors import (BFError, ConstructionError, DuplicateInstructionError,
                          EmptyStackError, ExecutionError, InputError,
                          InstructionError, OutputError, PointerUnderflowError,
                          UnmatchedBracketError)
from extbf.stack import Stack
from extbf.state import State
from extbf.instructions import DEFAULT_INSTRUCTIONS, Registry
from extbf.interpreter import ExecutionSnapshot, Interpreter
from extbf.defaults import default_config_with_updates, make_interpreter
