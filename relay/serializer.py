"""Decoding of trigger payloads."""

import json
from typing import Any, Mapping

from .domain import SubmissionEvent
from .exceptions import MalformedEvent


def loads(message: str) -> SubmissionEvent:
    """
    Load a :class:`.SubmissionEvent` from a JSON-encoded message.

    Raises
    ------
    :class:`.MalformedEvent`
        Raised when ``message`` is not a JSON object.

    """
    try:
        data = json.loads(message)
    except (TypeError, ValueError) as e:
        raise MalformedEvent(f'Could not decode message: {e}') from e
    if not isinstance(data, dict):
        raise MalformedEvent(f'Expected a JSON object, got {type(data)}')
    return SubmissionEvent.from_message(data)


def parse_envelope(envelope: Mapping[str, Any]) -> SubmissionEvent:
    """
    Extract the :class:`.SubmissionEvent` from an SNS notification envelope.

    Only the first record is considered; an envelope carries exactly one
    submission.

    Parameters
    ----------
    envelope : dict
        The event delivered to the handler, of the form
        ``{"Records": [{"Sns": {"Message": "<json>"}}]}``.

    Raises
    ------
    :class:`.MalformedEvent`
        Raised when the envelope does not have the expected structure, or the
        message cannot be decoded.

    """
    try:
        message = envelope['Records'][0]['Sns']['Message']
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedEvent(f'Not a notification envelope: {e!r}') from e
    return loads(message)
