"""Relay a submitted file into storage, and tell the submitter about it."""

import logging
import os
from typing import Any, Callable, Optional

from ..domain import LedgerWrite, MailStatus, State, SubmissionEvent
from ..exceptions import EmptyFile, TransferFailed
from ..services import Fetcher, Notifier, Publisher, Recorder
from .base import Process, step

logger = logging.getLogger(__name__)


class RelaySubmission(Process):
    """
    Fetch, publish, notify, record.

    If the file cannot be fetched, the submitter is told so before the
    failure is raised. A failure to publish is raised without telling the
    submitter.
    """

    def __init__(self, fetcher: Fetcher, publisher: Publisher,
                 notifier: Notifier, recorder: Recorder, scratch_dir: str,
                 process_id: Optional[str] = None) -> None:
        super(RelaySubmission, self).__init__(process_id)
        self.fetcher = fetcher
        self.publisher = publisher
        self.notifier = notifier
        self.recorder = recorder
        self.scratch_dir = scratch_dir

    def staging_path(self, event: SubmissionEvent) -> str:
        """Get the local path at which the submission is staged."""
        return os.path.join(self.scratch_dir, f'{event.submission_id}.zip')

    @step(State.FETCHED)
    async def fetch(self, previous: Any, event: SubmissionEvent,
                    emit: Callable) -> str:
        """Retrieve the submitted file; returns the staged path."""
        outcome = await self.fetcher.fetch(event.submission_url,
                                           self.staging_path(event))
        if outcome.ok:
            return outcome.path

        await self.notifier.notify(event, outcome.status)
        if outcome.status is MailStatus.EMPTY_FILE:
            raise EmptyFile(outcome.reason, 'fetch')
        raise TransferFailed(outcome.reason, 'fetch')

    @step(State.PUBLISHED)
    async def publish(self, previous: str, event: SubmissionEvent,
                      emit: Callable) -> str:
        """Copy the staged file into storage; returns the destination."""
        return await self.publisher.publish(previous, event.email_id,
                                            event.assignment_id,
                                            event.submission_id)

    @step(State.NOTIFIED)
    async def notify(self, previous: str, event: SubmissionEvent,
                     emit: Callable) -> MailStatus:
        """Tell the submitter where their file went."""
        return await self.notifier.notify(event, MailStatus.SUCCESS,
                                          previous)

    @step(State.RECORDED)
    async def record(self, previous: MailStatus, event: SubmissionEvent,
                     emit: Callable) -> LedgerWrite:
        """Record whether the status e-mail was delivered."""
        result = await self.recorder.record(event, previous)
        if not result.ok:
            logger.warning('Outcome of %s was not recorded: %s',
                           event.submission_id, result.error)
        return result
