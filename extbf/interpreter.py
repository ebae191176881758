"""Extensible BrainF**k interpreter.

The interpreter reads a program once, then walks it symbol by symbol:
look the symbol up in its Registry, apply the instruction to the State,
advance the program counter unless the instruction moved it. Symbols that are
not registered are comments and are skipped.

An Interpreter is meant to be run once. A second run() continues from
wherever the program counter was left.
"""

import logging
import sys
from collections import namedtuple

from extbf.errors import BFError, ConstructionError, ExecutionError, OutputError
from extbf.instructions import Registry
from extbf.state import DEFAULT_CELL_TYPE, State

logger = logging.getLogger(__name__)

ExecutionSnapshot = namedtuple(
    'ExecutionSnapshot',
    ['codeptr', 'codechar', 'memptr', 'memval', 'memory'])


def read_code(code):
  """Accept the program as a string, bytes or anything with a read() method"""
  if hasattr(code, 'read'):
    try:
      code = code.read()
    except (OSError, ValueError) as e:
      raise ConstructionError(f'failed to read code: {e}') from e

  if isinstance(code, (bytes, bytearray)):
    try:
      code = code.decode('utf-8')
    except UnicodeDecodeError as e:
      raise ConstructionError(f'failed to read code: {e}') from e

  if not isinstance(code, str):
    raise ConstructionError(f'can not read code from {type(code).__name__}')

  return code


class Interpreter(object):
  def __init__(self, code, input_stream=None, output_stream=None,
               debug=False, instructions=None, trace_stream=None,
               cell_type=DEFAULT_CELL_TYPE):
    self.registry = Registry()
    self.state = State(read_code(code), input_stream, output_stream, cell_type)

    self.debug = debug
    self.trace_stream = trace_stream
    self.program_trace = [] if debug else None

    self.steps = 0
    self.started = False
    self.finished = False

    for symbol, instruction in (instructions or {}).items():
      self.register(symbol, instruction)

  def register(self, symbol, instruction):
    if self.started:
      raise ConstructionError(f'can not register instruction {symbol!r}: the program already started')
    self.registry.register(symbol, instruction)

  def record_snapshot(self, symbol):
    s = self.state
    self.program_trace.append(ExecutionSnapshot(
        codeptr=s.program_counter, codechar=symbol, memptr=s.data_ptr,
        memval=s.cell, memory=list(s.data)))

    trace_stream = self.trace_stream if self.trace_stream is not None else sys.stderr
    trace_stream.write(f'{s.program_counter}: {symbol} \t cells: {s.data_ptr} {s.tape()}\n')

  def apply_instruction(self, instruction):
    pc = self.state.program_counter

    instruction(self.state)

    if self.state.program_counter == pc:
      # an instruction that moved the program counter asked for a jump
      self.state.program_counter += 1

  def step(self):
    s = self.state
    symbol = s.code[s.program_counter]
    instruction = self.registry.get(symbol)

    if instruction is None:
      s.program_counter += 1
      return

    pc = s.program_counter
    try:
      if self.debug:
        self.record_snapshot(symbol)
      self.apply_instruction(instruction)
    except BFError as e:
      raise ExecutionError(pc, symbol, e) from e
    except Exception as e:
      # custom instructions may fail in their own ways
      raise ExecutionError(pc, symbol, repr(e)) from e

    self.steps += 1

  def finish_output(self):
    s = self.state
    try:
      s.output_stream.write('\n')
      s.output_stream.flush()
    except (OSError, ValueError) as e:
      error = OutputError(f'failed to write output: {e}')
      error.__cause__ = e
      raise ExecutionError(s.program_counter, None, error) from error

  def flush_after_failure(self):
    # the error already in flight is the one worth reporting
    try:
      self.state.output_stream.flush()
    except (OSError, ValueError) as e:
      logger.warning('Could not flush output after failure: %s', e)

  def run(self):
    if self.finished:
      logger.warning('Running a program that has already finished')

    self.started = True
    s = self.state
    logger.debug('Running %d symbols of code', len(s.code))

    try:
      while s.program_counter < len(s.code):
        self.step()
    except BaseException:
      self.flush_after_failure()
      raise

    self.finish_output()

    self.finished = True
    logger.info('Program finished after %d steps', self.steps)
