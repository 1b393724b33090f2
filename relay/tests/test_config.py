"""Tests for :mod:`.config`."""

import warnings
from unittest import TestCase

from ..config import Settings, load


class TestLoad(TestCase):
    """Load settings from the environment."""

    def test_defaults(self):
        """Nothing is configured."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            settings = load({})
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.ledger_table, 'assignment-submissions')
        self.assertEqual(settings.fetch_max_hops, 1)
        self.assertIsNone(settings.fetch_timeout)
        self.assertEqual(len(caught), 2, 'Missing secrets are called out')

    def test_load(self):
        """Everything is configured."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            settings = load({
                'LOGLEVEL': '10',
                'GCP_PROJECT_ID': 'project',
                'GCP_BUCKET_NAME': 'bucket',
                'GCP_SERVICE_ACCOUNT_KEY': 'e30=',
                'SG_API_KEY': 'SG.key',
                'TEMPLATE_ID': 'd-success',
                'TEMPLATE_ID_FAILED': 'd-failed',
                'TEMPLATE_ID_EMPTY_FILE': 'd-empty',
                'MAIL_ASM_GROUP_ID': '123',
                'LEDGER_TABLE': 'ledger',
                'SCRATCH_DIR': '/scratch',
                'FETCH_TIMEOUT': '2.5'
            })
        self.assertEqual(caught, [])
        self.assertEqual(settings.loglevel, 10)
        self.assertEqual(settings.storage_project_id, 'project')
        self.assertEqual(settings.storage_bucket, 'bucket')
        self.assertEqual(settings.credential_json, 'e30=')
        self.assertEqual(settings.mail_api_key, 'SG.key')
        self.assertEqual(settings.template_success, 'd-success')
        self.assertEqual(settings.template_failed, 'd-failed')
        self.assertEqual(settings.template_empty_file, 'd-empty')
        self.assertEqual(settings.mail_asm_group_id, 123)
        self.assertEqual(settings.ledger_table, 'ledger')
        self.assertEqual(settings.scratch_dir, '/scratch')
        self.assertEqual(settings.fetch_timeout, 2.5)
