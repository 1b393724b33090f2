"""Tests for :mod:`.serializer`."""

import json
from unittest import TestCase

from ..domain import SubmissionEvent
from ..exceptions import MalformedEvent
from ..serializer import loads, parse_envelope

MESSAGE = {
    'submissionId': 's1',
    'assignmentId': 'a1',
    'emailId': 'u@x.com',
    'submissionUrl': 'https://ok/file.zip',
    'assignmentName': 'HW1',
    'firstName': 'Ana'
}


def envelope(message) -> dict:
    return {'Records': [{'EventSource': 'aws:sns',
                         'Sns': {'Type': 'Notification',
                                 'Message': message}}]}


class TestParseEnvelope(TestCase):
    """Extract submission events from notification envelopes."""

    def test_parse(self):
        """The envelope carries a complete submission event."""
        event = parse_envelope(envelope(json.dumps(MESSAGE)))
        self.assertEqual(event, SubmissionEvent(
            submission_id='s1', assignment_id='a1', assignment_name='HW1',
            email_id='u@x.com', first_name='Ana',
            submission_url='https://ok/file.zip'
        ))

    def test_incomplete(self):
        """Missing fields are not a parse error."""
        event = parse_envelope(envelope(json.dumps({'submissionId': 's1'})))
        self.assertEqual(event.submission_id, 's1')
        self.assertIsNone(event.submission_url)

    def test_not_an_envelope(self):
        """The event is not shaped like a notification."""
        for bad in ({}, {'Records': []}, {'Records': [{}]}, None,
                    {'Records': [{'Sns': {}}]}):
            with self.assertRaises(MalformedEvent):
                parse_envelope(bad)

    def test_bad_message(self):
        """The message is not a JSON object."""
        for bad in ('not json', '[1, 2]', '"s1"', None):
            with self.assertRaises(MalformedEvent):
                parse_envelope(envelope(bad))

    def test_loads(self):
        self.assertEqual(loads(json.dumps(MESSAGE)).first_name, 'Ana')
