"""Exceptions raised while relaying a submission."""

from typing import Optional


class MalformedEvent(ValueError):
    """The trigger payload could not be decoded into a submission event."""


class ConfigurationError(RuntimeError):
    """A required parameter is missing from the configuration."""


class Failed(RuntimeError):
    """
    A stage of the relay has failed and cannot recover.

    The hosting environment decides whether the triggering notification is
    redelivered.
    """

    def __init__(self, msg: str, step_name: Optional[str] = None) -> None:
        """Initialize with support for an optional ``step_name``."""
        super(Failed, self).__init__(msg)
        self.step_name = step_name


class TransferFailed(Failed):
    """The submission could not be retrieved from its source URL."""


class EmptyFile(TransferFailed):
    """The source URL responded with a zero-byte body."""


class PublishFailed(Failed):
    """The staged submission could not be copied into object storage."""
