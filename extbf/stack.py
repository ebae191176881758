from extbf.errors import EmptyStackError


class Stack(object):
  """LIFO container. Holds the program counters of open loop brackets."""

  def __init__(self, values=()):
    self._data = list(values)

  def push(self, value):
    self._data.append(value)

  def pop(self):
    if not self._data:
      raise EmptyStackError()
    return self._data.pop()

  def peek(self):
    if not self._data:
      raise EmptyStackError('can not peek into empty stack')
    return self._data[-1]

  def __len__(self):
    return len(self._data)

  def __bool__(self):
    return bool(self._data)

  def __repr__(self):
    return f'Stack({self._data!r})'
