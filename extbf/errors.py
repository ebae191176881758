"""Exceptions raised while building and running an interpreter."""


class BFError(Exception):
  """Base class for everything this package raises on purpose"""
  pass


class ConstructionError(BFError):
  """The interpreter could not be assembled. The run never starts."""
  pass


class DuplicateInstructionError(ConstructionError):
  def __init__(self, symbol):
    super().__init__(f'can not redefine instruction {symbol!r}')
    self.symbol = symbol


class EmptyStackError(BFError):
  def __init__(self, message='can not pop from empty stack'):
    super().__init__(message)


class InstructionError(BFError):
  """An instruction could not be applied to the state"""
  pass


class PointerUnderflowError(InstructionError):
  def __init__(self, message='can not decrement data pointer: data pointer is zero'):
    super().__init__(message)


class UnmatchedBracketError(InstructionError):
  pass


class InputError(InstructionError):
  pass


class OutputError(InstructionError):
  pass


class ExecutionError(BFError):
  """A program stopped because one of its instructions failed.

  The failing instruction's exception is chained as __cause__.
  """
  def __init__(self, pc, symbol, details=None):
    if symbol is None:
      msg = f'program failed to finish at {pc}'
    else:
      msg = f'instruction {pc} ({symbol}) failed to run'
    if details:
      msg = f'{msg}: {details}'
    super().__init__(msg)
    self.pc = pc
    self.symbol = symbol
    self.details = details
