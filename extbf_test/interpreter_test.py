"""Tests for extbf.interpreter."""

import io
import unittest

from extbf.errors import (ConstructionError, DuplicateInstructionError,
                          ExecutionError, OutputError,
                          PointerUnderflowError, UnmatchedBracketError)
from extbf.interpreter import ExecutionSnapshot, Interpreter


class FailingReader(object):
  def read(self):
    raise OSError('disk on fire')


class BrokenPipe(object):
  """Accepts writes but fails once asked to flush them"""

  def __init__(self):
    self.written = ''

  def write(self, text):
    self.written += text

  def flush(self):
    raise OSError('broken pipe')


def evaluate(code, input_buffer='', **kwargs):
  output = io.StringIO()
  agent = Interpreter(code, io.StringIO(input_buffer), output, **kwargs)
  agent.run()
  return agent, output.getvalue()


class InterpreterTest(unittest.TestCase):

  def assertCorrectOutput(self, target_output, code, input_buffer=''):
    agent, output = evaluate(code, input_buffer)
    self.assertEqual(target_output + '\n', output)
    self.assertTrue(agent.finished)
    return agent

  def assertFailsWith(self, error_type, code, input_buffer=''):
    output = io.StringIO()
    agent = Interpreter(code, io.StringIO(input_buffer), output)
    with self.assertRaises(ExecutionError) as cm:
      agent.run()
    self.assertIsInstance(cm.exception.__cause__, error_type)
    self.assertFalse(agent.finished)
    return cm.exception, output.getvalue()

  def testBasicOps(self):
    agent = self.assertCorrectOutput(chr(3) + chr(1) + chr(2), '+++.--.+.')
    self.assertEqual(9, agent.steps)

  def testPlusMinusWraparound(self):
    for plus, minus in [(0, 0), (5, 2), (2, 5), (300, 0), (0, 257)]:
      agent, _ = evaluate('+' * plus + '-' * minus)
      self.assertEqual((plus - minus) % 256, agent.state.data[0])

  def testMoveRightThenLeft(self):
    agent, _ = evaluate('>>>+<')
    self.assertEqual(2, agent.state.data_ptr)
    self.assertEqual([0, 0, 0, 1], agent.state.data)

    agent, _ = evaluate('>>><>')
    self.assertEqual(3, agent.state.data_ptr)
    self.assertEqual([0, 0, 0, 0], agent.state.data)

  def testPointerUnderflow(self):
    error, output = self.assertFailsWith(PointerUnderflowError, '+.<')
    self.assertEqual(2, error.pc)
    self.assertEqual('<', error.symbol)
    # output produced before the failure is still flushed, without the newline
    self.assertEqual(chr(1), output)

  def testLoopWithZeroCellIsSkipped(self):
    agent = self.assertCorrectOutput(chr(1), '[+.>+<]+.')
    self.assertEqual([1], agent.state.data)

  def testLoopRunsUntilCellIsZero(self):
    agent = self.assertCorrectOutput('', '+++[>++<-]')
    self.assertEqual([0, 6], agent.state.data)
    self.assertEqual(0, len(agent.state.stack))

  def testNestedLoops(self):
    agent, _ = evaluate('++[>+++[>++<-]<-]')
    self.assertEqual([0, 0, 12], agent.state.data)

  def testTransferLoop(self):
    agent = self.assertCorrectOutput(chr(7), '++>+++++[<+>-]<.')
    self.assertEqual(7, agent.state.data[0])

  def testCat(self):
    # end of input leaves the cell as it was, so the loop needs a NUL to stop
    self.assertCorrectOutput('AB', ',[.,]', input_buffer='AB\x00')

  def testEndOfInputKeepsCell(self):
    agent, _ = evaluate('+++++++,')
    self.assertEqual(7, agent.state.data[0])

  def testUnmatchedClose(self):
    error, output = self.assertFailsWith(UnmatchedBracketError, ']')
    self.assertEqual(0, error.pc)
    self.assertEqual('', output)

  def testUnmatchedOpen(self):
    error, _ = self.assertFailsWith(UnmatchedBracketError, '+>[-')
    self.assertEqual(2, error.pc)
    self.assertEqual('[', error.symbol)

  def testCommentsAreSkipped(self):
    plain, plain_output = evaluate('++>+++++[<+>-]<.')
    noisy, noisy_output = evaluate('add two++ move>+++++ loop[<+>-]go back<. done')
    self.assertEqual(plain_output, noisy_output)
    self.assertEqual(plain.state.data, noisy.state.data)
    self.assertEqual(plain.state.data_ptr, noisy.state.data_ptr)
    self.assertEqual(plain.steps, noisy.steps)

  def testCodeFromStreams(self):
    agent, output = evaluate(io.BytesIO(b'+++.'))
    self.assertEqual(chr(3) + '\n', output)
    agent, output = evaluate(io.StringIO('++.'))
    self.assertEqual(chr(2) + '\n', output)

  def testUnreadableCode(self):
    with self.assertRaises(ConstructionError):
      Interpreter(FailingReader(), io.StringIO(), io.StringIO())
    with self.assertRaises(ConstructionError):
      Interpreter(b'\xff+', io.StringIO(), io.StringIO())

  def testCustomInstructions(self):
    def square(s):
      s.cell = s.cell * s.cell

    agent, _ = evaluate('+++*', instructions={'*': square})
    self.assertEqual([9], agent.state.data)

  def testCustomJump(self):
    def skip_next(s):
      s.program_counter += 2

    agent, _ = evaluate('+j+++', instructions={'j': skip_next})
    self.assertEqual([3], agent.state.data)

  def testCustomInstructionFailure(self):
    def explode(s):
      raise KeyError('boom')

    agent = Interpreter('+!', io.StringIO(), io.StringIO(), instructions={'!': explode})
    with self.assertRaises(ExecutionError) as cm:
      agent.run()
    self.assertEqual(1, cm.exception.pc)
    self.assertIsInstance(cm.exception.__cause__, KeyError)

  def testDuplicateRegistrationKeepsBuiltin(self):
    def nothing(s):
      pass

    agent = Interpreter('++.', io.StringIO(), io.StringIO())
    with self.assertRaises(DuplicateInstructionError):
      agent.register('+', nothing)
    agent.run()
    self.assertEqual([2], agent.state.data)

    with self.assertRaises(DuplicateInstructionError):
      Interpreter('+', instructions={'.': nothing})

  def testRegisterAfterRun(self):
    agent, _ = evaluate('+')
    with self.assertRaises(ConstructionError):
      agent.register('*', lambda s: None)

  def testRunTwice(self):
    agent, _ = evaluate('+++')
    agent.run()
    self.assertEqual([3], agent.state.data)
    self.assertEqual(3, agent.steps)

  def testProgramTrace(self):
    trace = io.StringIO()
    agent, _ = evaluate('+>x+', debug=True, trace_stream=trace)
    es = ExecutionSnapshot
    self.assertEqual(
        [es(codeptr=0, codechar='+', memptr=0, memval=0, memory=[0]),
         es(codeptr=1, codechar='>', memptr=0, memval=1, memory=[1]),
         es(codeptr=3, codechar='+', memptr=1, memval=0, memory=[1, 0])],
        agent.program_trace)
    self.assertEqual(
        '0: + \t cells: 0 [0]\n'
        '1: > \t cells: 0 [1]\n'
        '3: + \t cells: 1 [1 0]\n',
        trace.getvalue())

  def testTraceKeepsOneLinePerStep(self):
    for length in [50, 1100]:
      trace = io.StringIO()
      agent, _ = evaluate('>' * length + '+', debug=True, trace_stream=trace)
      lines = trace.getvalue().splitlines()
      self.assertEqual(length + 1, len(lines))
      self.assertEqual('[' + ' '.join(['0'] * (length + 1)) + ']', lines[-1].split(' ', 5)[-1])
      self.assertNotIn('...', trace.getvalue())

  def testTraceDoesNotPadCells(self):
    trace = io.StringIO()
    evaluate('+' * 10 + '>+', debug=True, trace_stream=trace)
    self.assertEqual('11: + \t cells: 1 [10 0]', trace.getvalue().splitlines()[-1])

  def testFlushFailureAfterSuccess(self):
    sink = BrokenPipe()
    agent = Interpreter('+.', io.StringIO(), sink)
    with self.assertRaises(ExecutionError) as cm:
      agent.run()
    self.assertIsInstance(cm.exception.__cause__, OutputError)
    self.assertIsNone(cm.exception.symbol)
    self.assertEqual(2, cm.exception.pc)
    self.assertFalse(agent.finished)

  def testFlushFailureKeepsOriginalError(self):
    agent = Interpreter('+.<', io.StringIO(), BrokenPipe())
    with self.assertLogs('extbf', level='WARNING'):
      with self.assertRaises(ExecutionError) as cm:
        agent.run()
    self.assertIsInstance(cm.exception.__cause__, PointerUnderflowError)
    self.assertEqual(2, cm.exception.pc)

  def testLogsStepCount(self):
    with self.assertLogs('extbf', level='INFO') as cm:
      evaluate('+x++')
    self.assertIn('Program finished after 3 steps', cm.output[-1])

  def testNoTraceByDefault(self):
    agent, _ = evaluate('+')
    self.assertIsNone(agent.program_trace)


if __name__ == '__main__':
  unittest.main()
