"""Test running processes."""

from unittest import IsolatedAsyncioTestCase, mock

from .. import process
from ..domain import State
from ..exceptions import Failed
from ..runner import ProcessRunner


class TestProcess(IsolatedAsyncioTestCase):
    """Test running a process."""

    def setUp(self):
        """Given a process."""
        class FooProcess(process.Process):
            @process.step(State.FETCHED)
            async def step_a(self, previous, event, emit):
                return event.some_value + 1

            @process.step(State.PUBLISHED)
            async def step_b(self, previous, event, emit):
                return (previous + 1) ** 2

            @process.step(State.NOTIFIED)
            async def step_c(self, previous, event, emit):
                if previous > 20:
                    raise Failed('fail like it\'s 1999')
                return (previous + 1) ** 2

            @process.step(State.RECORDED)
            async def step_d(self, previous, event, emit):
                if previous > 100:
                    raise ValueError('too big')
                return previous

        self.FooProcess = FooProcess

    async def test_call(self):
        """Running the process runs all steps in order."""
        runner = ProcessRunner(self.FooProcess('fooid'))
        data = await runner.run(mock.MagicMock(some_value=1))

        self.assertEqual(data.process_id, 'fooid')
        self.assertEqual(data.results, [2, 9, 100, 100])
        self.assertEqual(data.states, [State.START, State.FETCHED,
                                       State.PUBLISHED, State.NOTIFIED,
                                       State.RECORDED])

    async def test_failing_process(self):
        """A step fails, and the rest are not run."""
        runner = ProcessRunner(self.FooProcess())
        with self.assertRaises(Failed) as ctx:
            await runner.run(mock.MagicMock(some_value=5))
        self.assertEqual(ctx.exception.step_name, 'step_c')

    async def test_unexpected_error(self):
        """An error that is not a failure is raised as-is."""
        runner = ProcessRunner(self.FooProcess())
        with self.assertRaises(ValueError):
            await runner.run(mock.MagicMock(some_value=2))

    async def test_failed_state(self):
        """The failed state is entered when a step fails."""
        proc = self.FooProcess()
        states = []
        proc.on_failure('step_c', None, states.append)
        proc.on_success('step_b', None, states.append)
        self.assertEqual(states, [State.FAILED, State.PUBLISHED])

    def test_process_id(self):
        """Each process gets its own identifier."""
        self.assertNotEqual(self.FooProcess().process_id,
                            self.FooProcess().process_id)
