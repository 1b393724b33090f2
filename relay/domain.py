"""Core data structures for the submission relay."""

from typing import Any, Optional, List, Dict
from enum import Enum
from dataclasses import dataclass, field


class MailStatus(str, Enum):
    """Outcome of a pipeline stage, as communicated to the submitter."""

    SUCCESS = 'SUCCESS'
    """The file was transferred, or an e-mail was delivered."""
    FAILED = 'FAILED'
    """The source could not be retrieved, or an e-mail was not delivered."""
    EMPTY_FILE = 'EMPTY_FILE'
    """The source responded, but with a zero-byte body."""


class State(Enum):
    """States that a relay run passes through."""

    START = 'start'
    FETCHED = 'fetched'
    PUBLISHED = 'published'
    NOTIFIED = 'notified'
    RECORDED = 'recorded'
    FAILED = 'failed'


@dataclass(frozen=True)
class SubmissionEvent:
    """
    Represents a single submission notification.

    Fields are not validated on construction. A missing value surfaces as a
    failure in whichever stage first needs it.
    """

    submission_id: Optional[str] = field(default=None)
    """Opaque identifier; names the stored object and keys the ledger row."""
    assignment_id: Optional[str] = field(default=None)
    assignment_name: Optional[str] = field(default=None)
    email_id: Optional[str] = field(default=None)
    """Address of the submitter, who receives the status e-mail."""
    first_name: Optional[str] = field(default=None)
    submission_url: Optional[str] = field(default=None)
    """Location from which the submitted file is retrieved."""

    @classmethod
    def from_message(cls, data: Dict[str, Any]) -> 'SubmissionEvent':
        """Build a :class:`.SubmissionEvent` from a decoded message body."""
        return cls(submission_id=data.get('submissionId'),
                   assignment_id=data.get('assignmentId'),
                   assignment_name=data.get('assignmentName'),
                   email_id=data.get('emailId'),
                   first_name=data.get('firstName'),
                   submission_url=data.get('submissionUrl'))


@dataclass(frozen=True)
class TransferOutcome:
    """Result of retrieving a submission from its source URL."""

    status: MailStatus
    path: Optional[str] = field(default=None)
    """Local path of the staged file, if anything was written."""
    size: int = field(default=0)
    reason: Optional[str] = field(default=None)
    """Explanation of a non-successful outcome."""

    @property
    def ok(self) -> bool:
        """Whether the file was staged with some content."""
        return self.status is MailStatus.SUCCESS

    @classmethod
    def succeeded(cls, path: str, size: int) -> 'TransferOutcome':
        return cls(MailStatus.SUCCESS, path=path, size=size)

    @classmethod
    def empty(cls, path: str) -> 'TransferOutcome':
        return cls(MailStatus.EMPTY_FILE, path=path, size=0,
                   reason='File size is 0')

    @classmethod
    def failed(cls, reason: str) -> 'TransferOutcome':
        return cls(MailStatus.FAILED, reason=reason)


@dataclass(frozen=True)
class LedgerRecord:
    """A row in the submission ledger."""

    submission_id: Optional[str]
    assignment_id: Optional[str]
    submission_url: Optional[str]
    email_id: Optional[str]
    timestamp: int
    """Time of the write, in milliseconds since the epoch."""
    mail_status: MailStatus

    def to_item(self) -> Dict[str, Any]:
        """
        Render as a ledger item, omitting unset attributes.

        Identifying attributes come straight from the event payload, and are
        stored as strings whatever their JSON type.
        """
        item: Dict[str, Any] = {
            key: str(value) for key, value in (
                ('submission_id', self.submission_id),
                ('assignment_id', self.assignment_id),
                ('submission_url', self.submission_url),
                ('email_id', self.email_id),
            ) if value is not None
        }
        item['timestamp'] = int(self.timestamp)
        item['mail_status'] = MailStatus(self.mail_status).value
        return item


@dataclass(frozen=True)
class LedgerWrite:
    """Result of a best-effort attempt to write a :class:`.LedgerRecord`."""

    record: LedgerRecord
    ok: bool
    error: Optional[str] = field(default=None)


@dataclass
class ProcessData:
    """
    Represents data associated with a single relay run.

    As steps are completed, their return values are appended to
    :attr:`.results`.
    """

    process_id: str
    """Unique identifier of a specific run."""

    event: SubmissionEvent
    """The notification that triggered the run."""

    results: List[Any] = field(default_factory=list)
    """The results of each step in the process, in order."""

    states: List[State] = field(default_factory=list)
    """Every state entered by the run, in order."""

    @property
    def state(self) -> Optional[State]:
        """The most recently entered state."""
        return self.states[-1] if self.states else None

    def get_last_result(self) -> Any:
        """Get the result of the most recent successful step."""
        return self.results[-1]

    def add_result(self, result: Any) -> None:
        """Add a result from a successful step."""
        self.results.append(result)
