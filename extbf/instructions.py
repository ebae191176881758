"""The eight instructions of vanilla Brainfuck and the registry that maps
symbols to instructions.

Language info: https://en.wikipedia.org/wiki/Brainfuck

An instruction is any callable that takes the State and returns nothing. It
signals failure by raising. If it leaves state.program_counter untouched the
interpreter advances to the next symbol, otherwise the new value is taken as
a jump.
"""

import logging
from types import MappingProxyType

from extbf.errors import (ConstructionError, DuplicateInstructionError,
                          EmptyStackError, InputError, OutputError,
                          PointerUnderflowError, UnmatchedBracketError)

logger = logging.getLogger(__name__)


def incr_data(s):
  """Increment (increase by one) the cell at the data pointer."""
  s.cell = s.cell + 1


def decr_data(s):
  """Decrement (decrease by one) the cell at the data pointer."""
  s.cell = s.cell - 1


def incr_ptr(s):
  """Move the data pointer one cell to the right."""
  s.data_ptr += 1
  s.expand()


def decr_ptr(s):
  """Move the data pointer one cell to the left."""
  if s.data_ptr == 0:
    raise PointerUnderflowError()
  s.data_ptr -= 1


def write_output(s):
  """Output the cell at the data pointer as a character."""
  try:
    s.output_stream.write(chr(s.cell))
  except (OSError, ValueError) as e:
    raise OutputError(f'failed to write output: {e}') from e


def read_input(s):
  """Accept one character of input, storing its code point in the cell at the
  data pointer. The cell keeps its value at end of input.
  """
  try:
    val = s.input_stream.read(1)
  except (OSError, ValueError) as e:
    raise InputError(f'failed to read input: {e}') from e

  if not val:
    return

  s.cell = ord(val)


def begin_loop(s):
  """If the cell at the data pointer is zero, jump past the matching ]"""
  s.stack.push(s.program_counter)

  if s.cell != 0:
    return

  for i in range(s.program_counter + 1, len(s.code)):
    if s.code[i] == '[':
      s.stack.push(i)
    elif s.code[i] == ']':
      try:
        pc = s.stack.pop()
      except EmptyStackError as e:
        raise UnmatchedBracketError(f"can not end loop at {i}: no matching '[' found") from e

      if pc == s.program_counter:
        s.program_counter = i + 1
        return

  raise UnmatchedBracketError("can not skip loop: no matching ']' found")


def end_loop(s):
  """If the cell at the data pointer is nonzero, jump back to the matching ["""
  try:
    pc = s.stack.pop()
  except EmptyStackError as e:
    raise UnmatchedBracketError("can not end loop: no matching '[' found") from e

  if s.cell == 0:
    return

  s.program_counter = pc


DEFAULT_INSTRUCTIONS = MappingProxyType({
  '>': incr_ptr,
  '<': decr_ptr,
  '+': incr_data,
  '-': decr_data,
  '.': write_output,
  ',': read_input,
  '[': begin_loop,
  ']': end_loop,
})


class Registry(object):
  """Symbol to instruction mapping owned by a single interpreter.

  Starts as a copy of DEFAULT_INSTRUCTIONS. Symbols can be added but never
  redefined, so neither the built-ins nor earlier additions can be overridden.
  """

  def __init__(self, defaults=DEFAULT_INSTRUCTIONS):
    self._instructions = dict(defaults)

  def register(self, symbol, instruction):
    if not isinstance(symbol, str) or len(symbol) != 1:
      raise ConstructionError(f'instruction symbol must be a single character, got {symbol!r}')
    if not callable(instruction):
      raise ConstructionError(f'instruction for {symbol!r} is not callable')
    if symbol in self._instructions:
      raise DuplicateInstructionError(symbol)

    self._instructions[symbol] = instruction
    logger.debug('Registered instruction %r', symbol)

  def symbols(self):
    return ''.join(self._instructions)

  def get(self, symbol, default=None):
    return self._instructions.get(symbol, default)

  def __getitem__(self, symbol):
    return self._instructions[symbol]

  def __contains__(self, symbol):
    return symbol in self._instructions

  def __iter__(self):
    return iter(self._instructions)

  def __len__(self):
    return len(self._instructions)
