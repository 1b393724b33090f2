"""Records relay outcomes in a DynamoDB ledger table."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pytz import UTC

from ..config import Settings
from ..domain import LedgerRecord, LedgerWrite, MailStatus, SubmissionEvent

logger = logging.getLogger(__name__)


def to_millis(moment: datetime) -> int:
    """Milliseconds since the epoch."""
    return int(moment.timestamp() * 1000)


class Recorder:
    """
    Writes one :class:`.LedgerRecord` per relay run.

    Rows are keyed by submission ID and write time, so running the same
    submission twice yields two rows.
    """

    def __init__(self, table_name: str, region_name: str,
                 endpoint_url: Optional[str] = None,
                 resource: Optional[Any] = None) -> None:
        self.table_name = table_name
        if resource is None:
            resource = boto3.resource('dynamodb', region_name=region_name,
                                      endpoint_url=endpoint_url)
        self.resource = resource

    @classmethod
    def from_settings(cls, settings: Settings) -> 'Recorder':
        """Get a :class:`.Recorder` configured by ``settings``."""
        return cls(settings.ledger_table, settings.aws_region,
                   settings.dynamodb_endpoint)

    @property
    def table(self) -> Any:
        return self.resource.Table(self.table_name)

    def put(self, record: LedgerRecord) -> None:
        """Store ``record``, with no retry."""
        self.table.put_item(Item=record.to_item())

    async def record(self, event: SubmissionEvent, mail_status: MailStatus,
                     now: Optional[datetime] = None) -> LedgerWrite:
        """
        Record the outcome of a run.

        This is a best-effort write: failures are logged and reported in the
        return value, and are never raised.

        Parameters
        ----------
        event : :class:`.SubmissionEvent`
        mail_status : :class:`.MailStatus`
            Whether the status e-mail was delivered.
        now : :class:`datetime`
            Write time; defaults to the current time.

        Returns
        -------
        :class:`.LedgerWrite`

        """
        if now is None:
            now = datetime.now(UTC)
        record = LedgerRecord(submission_id=event.submission_id,
                              assignment_id=event.assignment_id,
                              submission_url=event.submission_url,
                              email_id=event.email_id,
                              timestamp=to_millis(now),
                              mail_status=mail_status)
        logger.info('Updating ledger %s', self.table_name)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.put, record)
        except (BotoCoreError, ClientError, TypeError) as e:
            logger.error('Error while updating ledger: %s', e)
            return LedgerWrite(record=record, ok=False, error=str(e))
        logger.info('Updated ledger %s', self.table_name)
        return LedgerWrite(record=record, ok=True)

    def table_exists(self) -> bool:
        """Determine whether or not the ledger table exists."""
        try:
            self.table.load()
        except ClientError as e:
            if e.response['Error']['Code'] == 'ResourceNotFoundException':
                return False
            raise
        return True

    def create_table(self) -> None:
        """Create the ledger table, and wait for it to become active."""
        table = self.resource.create_table(
            TableName=self.table_name,
            KeySchema=[
                {'AttributeName': 'submission_id', 'KeyType': 'HASH'},
                {'AttributeName': 'timestamp', 'KeyType': 'RANGE'}
            ],
            AttributeDefinitions=[
                {'AttributeName': 'submission_id', 'AttributeType': 'S'},
                {'AttributeName': 'timestamp', 'AttributeType': 'N'}
            ],
            BillingMode='PAY_PER_REQUEST'
        )
        table.wait_until_exists()

    def is_available(self) -> bool:
        """Check our connection to the ledger table."""
        try:
            self.table_exists()
        except (BotoCoreError, ClientError) as e:
            logger.error('Encountered an error talking to the ledger: %s', e)
            return False
        return True
