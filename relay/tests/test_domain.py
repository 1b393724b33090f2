"""Tests for :mod:`.domain`."""

from unittest import TestCase

from ..domain import LedgerRecord, MailStatus, ProcessData, State, \
    SubmissionEvent, TransferOutcome


class TestLedgerRecord(TestCase):
    def test_to_item(self):
        """Unset attributes are left out of the item."""
        record = LedgerRecord(submission_id='s1', assignment_id='a1',
                              submission_url=None, email_id='u@x.com',
                              timestamp=1520188442000,
                              mail_status=MailStatus.SUCCESS)
        self.assertDictEqual(record.to_item(), {
            'submission_id': 's1',
            'assignment_id': 'a1',
            'email_id': 'u@x.com',
            'timestamp': 1520188442000,
            'mail_status': 'SUCCESS'
        })


class TestTransferOutcome(TestCase):
    def test_outcomes(self):
        self.assertTrue(TransferOutcome.succeeded('/tmp/s1.zip', 3).ok)
        self.assertFalse(TransferOutcome.empty('/tmp/s1.zip').ok)
        self.assertFalse(TransferOutcome.failed('nope').ok)


class TestProcessData(TestCase):
    def test_state(self):
        """The current state is the last one entered."""
        data = ProcessData(process_id='p1', event=SubmissionEvent())
        self.assertIsNone(data.state)
        data.states.extend([State.START, State.FETCHED])
        self.assertEqual(data.state, State.FETCHED)
