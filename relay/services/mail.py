"""Sends status e-mail to submitters via SendGrid."""

import asyncio
import http.client
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from python_http_client.exceptions import HTTPError
from pytz import UTC, timezone
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Asm, Mail

from ..config import Settings
from ..domain import MailStatus, SubmissionEvent
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EASTERN = timezone('US/Eastern')


def format_time(moment: datetime) -> str:
    """Render ``moment`` in Eastern time, e.g. ``3/4/2018, 1:34:02 PM``."""
    local = moment.astimezone(EASTERN)
    hour = local.hour % 12 or 12
    meridiem = 'AM' if local.hour < 12 else 'PM'
    return (f'{local.month}/{local.day}/{local.year},'
            f' {hour}:{local:%M:%S} {meridiem}')


class Notifier:
    """Sends templated status e-mail, one message per call."""

    def __init__(self, api_key: Optional[str],
                 templates: Mapping[MailStatus, Optional[str]],
                 sender: str, asm_group_id: int,
                 client: Optional[SendGridAPIClient] = None) -> None:
        self.api_key = api_key
        self.templates = templates
        self.sender = sender
        self.asm_group_id = asm_group_id
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> 'Notifier':
        """Get a :class:`.Notifier` configured by ``settings``."""
        templates = {
            MailStatus.SUCCESS: settings.template_success,
            MailStatus.FAILED: settings.template_failed,
            MailStatus.EMPTY_FILE: settings.template_empty_file,
        }
        return cls(settings.mail_api_key, templates, settings.mail_sender,
                   settings.mail_asm_group_id)

    def get_client(self) -> SendGridAPIClient:
        """Get or create the SendGrid client."""
        if not self.api_key:
            raise ConfigurationError('Mail API key is not configured')
        if self._client is None:
            self._client = SendGridAPIClient(self.api_key)
        return self._client

    def template_for(self, outcome: MailStatus) -> str:
        """Get the identifier of the template for ``outcome``."""
        template_id = self.templates.get(MailStatus(outcome))
        if not template_id:
            raise ConfigurationError(f'No template configured for {outcome}')
        return template_id

    def build_message(self, event: SubmissionEvent, outcome: MailStatus,
                      artifact_url: Optional[str] = None,
                      now: Optional[datetime] = None) -> Mail:
        """Compose the status message for ``event``."""
        if now is None:
            now = datetime.now(UTC)
        data: Dict[str, Any] = {
            'assignmentName': event.assignment_name,
            'submissionId': event.submission_id,
            'time': format_time(now),
            'userName': event.first_name,
        }
        if outcome is MailStatus.SUCCESS and artifact_url is not None:
            data['url'] = artifact_url

        message = Mail(from_email=self.sender, to_emails=event.email_id)
        message.template_id = self.template_for(outcome)
        message.dynamic_template_data = data
        message.asm = Asm(self.asm_group_id, [self.asm_group_id])
        return message

    async def notify(self, event: SubmissionEvent, outcome: MailStatus,
                     artifact_url: Optional[str] = None) -> MailStatus:
        """
        Send a status e-mail to the submitter.

        Parameters
        ----------
        event : :class:`.SubmissionEvent`
        outcome : :class:`.MailStatus`
            Selects the template.
        artifact_url : str
            Link to the published submission; only used for
            :attr:`.MailStatus.SUCCESS`.

        Returns
        -------
        :class:`.MailStatus`
            :attr:`.MailStatus.SUCCESS` if the message was accepted for
            delivery, otherwise :attr:`.MailStatus.FAILED`. This says nothing
            about ``outcome``.

        Raises
        ------
        :class:`.ConfigurationError`
            Raised if the API key or the selected template is not configured.

        """
        client = self.get_client()
        message = self.build_message(event, outcome, artifact_url)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, client.send, message)
        except (HTTPError, http.client.HTTPException, OSError) as e:
            logger.error('Failed to send email to %s for assignment %s: %s',
                         event.email_id, event.assignment_name, e)
            return MailStatus.FAILED
        logger.info('Email sent to %s for assignment %s', event.email_id,
                    event.assignment_name)
        return MailStatus.SUCCESS
