import logging
from typing import Any, Callable

from ..domain import ProcessData, State, SubmissionEvent
from ..exceptions import Failed
from ..process import Process

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Runs the steps of a :class:`.Process` in series, awaiting each."""

    def __init__(self, process: Process) -> None:
        self.process = process

    async def do(self, step_name: str, previous: Any,
                 event: SubmissionEvent, emit: Callable) -> Any:
        """Perform a single step, exactly once."""
        step = getattr(self.process, step_name)
        try:
            return await step(previous, event, emit)
        except Failed as e:
            if e.step_name is None:
                e.step_name = step_name
            raise

    async def run(self, event: SubmissionEvent) -> ProcessData:
        """
        Execute the process for ``event``.

        Returns
        -------
        :class:`.ProcessData`
            Results and states of the run.

        Raises
        ------
        Exception
            Whatever was raised by the failed step, after the failed state is
            recorded.

        """
        data = ProcessData(process_id=self.process.process_id, event=event)

        def emit(state: State) -> None:
            logger.debug('%s:%s entered %s', self.process.name,
                         self.process.process_id, state.name)
            data.states.append(state)

        self.process.before_start(event, emit)
        result = None
        logger.debug('%s started', self.process.name)
        for step in self.process.steps:
            try:
                result = await self.do(step.name, result, event, emit)
            except Exception as e:
                self.process.on_failure(step.name, event, emit)
                logger.error('%s:%s failed: %s', self.process.name,
                             step.name, e)
                raise
            data.add_result(result)
            self.process.on_success(step.name, event, emit)
            logger.debug('%s:%s succeeded', self.process.name, step.name)
        return data
