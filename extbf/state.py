"""Mutable execution context shared by all instructions.

The State has no behaviour of its own beyond data access. Every change to it
is made by an instruction that receives it as its only argument, which is what
lets custom instructions touch any field, the program counter included.
"""

import codecs
import io
import sys

import numpy as np

from extbf.errors import ConstructionError
from extbf.stack import Stack

DEFAULT_CELL_TYPE = 'uint8'


def cell_dtype(cell_type):
  """Resolve a numpy unsigned integer dtype from its name."""
  try:
    dtype = np.dtype(cell_type)
  except TypeError as e:
    raise ConstructionError(f'unknown cell type {cell_type!r}') from e

  if dtype.kind != 'u':
    raise ConstructionError(
      f'cell type must be an unsigned integer type, got {dtype.name}')
  return dtype


def cell_modulus(cell_type):
  return int(np.iinfo(cell_dtype(cell_type)).max) + 1


def is_binary(stream):
  return isinstance(stream, (io.RawIOBase, io.BufferedIOBase))


class CodePointReader(object):
  """Reads UTF-8 encoded bytes one code point at a time.

  Unlike TextIOWrapper it never reads ahead and never closes the stream.
  """

  def __init__(self, stream):
    self.stream = stream
    self.decoder = codecs.getincrementaldecoder('utf-8')()

  def read(self, size=1):
    chars = ''
    while len(chars) < size:
      byte = self.stream.read(1)
      if not byte:
        chars += self.decoder.decode(b'', final=True)
        break
      chars += self.decoder.decode(byte)
    return chars


def as_reader(stream):
  if is_binary(stream):
    return CodePointReader(stream)
  return stream


def as_writer(stream):
  if is_binary(stream):
    return codecs.getwriter('utf-8')(stream)
  return stream


class State(object):
  def __init__(self, code, input_stream=None, output_stream=None,
               cell_type=DEFAULT_CELL_TYPE):
    self.code = code

    self.input_stream = as_reader(input_stream if input_stream is not None else sys.stdin)
    self.output_stream = as_writer(output_stream if output_stream is not None else sys.stdout)

    self.program_counter = 0
    self.stack = Stack()

    self.cell_type = cell_dtype(cell_type).name
    self.cell_modulus = cell_modulus(cell_type)
    self.data = [0]
    self.data_ptr = 0

  @property
  def cell(self):
    return self.data[self.data_ptr]

  @cell.setter
  def cell(self, value):
    self.data[self.data_ptr] = value % self.cell_modulus

  def expand(self):
    """Grow the tape with zero cells until data_ptr is a valid index."""
    shortage = 1 + self.data_ptr - len(self.data)
    if shortage > 0:
      self.data.extend(0 for _ in range(shortage))

  def tape(self):
    """The tape on one line, e.g. [72 0 3]"""
    return '[' + ' '.join(str(value) for value in self.data) + ']'

  def __repr__(self):
    return (f'State(pc={self.program_counter}, data_ptr={self.data_ptr}, '
            f'data={self.data!r}, stack={self.stack!r})')
