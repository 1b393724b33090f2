"""Provides publication of staged submissions to Google Cloud Storage."""

import asyncio
import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage
from google.oauth2 import service_account

from ..config import Settings
from ..exceptions import ConfigurationError, PublishFailed

logger = logging.getLogger(__name__)

TOKEN_URI = 'https://oauth2.googleapis.com/token'
"""Used when the service account key does not name a token endpoint."""


def load_credential_info(encoded: str) -> Dict[str, Any]:
    """
    Decode a base64-encoded service account key.

    Only the parts of the key needed to sign requests are retained.

    Raises
    ------
    ValueError
        Raised if ``encoded`` is not base64-encoded JSON, or if the key lacks
        ``client_email`` or ``private_key``.

    """
    try:
        key = json.loads(base64.b64decode(encoded).decode('utf-8'))
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError('Service account key is not base64 encoded') from e
    if not isinstance(key, dict):
        raise ValueError('Service account key is not a JSON object')
    try:
        return {'client_email': key['client_email'],
                'private_key': key['private_key'],
                'token_uri': key.get('token_uri', TOKEN_URI)}
    except KeyError as e:
        raise ValueError(f'Service account key has no {e}') from e


def destination_key(email_id: str, assignment_id: str,
                    submission_id: str) -> str:
    """Get the object key at which a submission is published."""
    return f'uploads/{email_id}/{assignment_id}/{submission_id}.zip'


class Publisher:
    """Copies staged files into a storage bucket."""

    def __init__(self, project_id: Optional[str], bucket_name: Optional[str],
                 credential_json: Optional[str],
                 client: Optional[storage.Client] = None) -> None:
        self.project_id = project_id
        self.bucket_name = bucket_name
        self.credential_json = credential_json
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> 'Publisher':
        """Get a :class:`.Publisher` configured by ``settings``."""
        return cls(settings.storage_project_id, settings.storage_bucket,
                   settings.credential_json)

    def get_client(self) -> storage.Client:
        """Get or create the storage client."""
        if self._client is None:
            info = load_credential_info(self.credential_json)
            credentials = \
                service_account.Credentials.from_service_account_info(info)
            self._client = storage.Client(project=self.project_id,
                                          credentials=credentials)
        return self._client

    def upload(self, local_path: str, destination: str) -> None:
        """Upload ``local_path`` to ``destination`` in the bucket."""
        bucket = self.get_client().bucket(self.bucket_name)
        bucket.blob(destination).upload_from_filename(local_path)

    async def publish(self, local_path: str, email_id: str,
                      assignment_id: str, submission_id: str) -> str:
        """
        Publish a staged submission.

        The upload is attempted exactly once.

        Parameters
        ----------
        local_path : str
            Path of the staged file.
        email_id : str
        assignment_id : str
        submission_id : str
            Together, these determine the destination key; see
            :func:`destination_key`.

        Returns
        -------
        str
            The key at which the file was stored.

        Raises
        ------
        :class:`.ConfigurationError`
            Raised if the project, bucket or credential is not configured.
        :class:`.PublishFailed`
            Raised if the upload fails for any other reason.

        """
        for name in ('project_id', 'bucket_name', 'credential_json'):
            if not getattr(self, name):
                raise ConfigurationError(f'Storage {name} is not configured')

        destination = destination_key(email_id, assignment_id, submission_id)
        logger.debug('Bucket Name: %s', self.bucket_name)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.upload, local_path,
                                       destination)
        except (GoogleAPIError, GoogleAuthError, OSError, ValueError) as e:
            logger.error('Error uploading file: %s', e)
            raise PublishFailed(f'Could not upload {local_path} to'
                                f' {self.bucket_name}/{destination}') from e

        logger.info('File %s uploaded to %s/%s', local_path,
                    self.bucket_name, destination)
        return destination
