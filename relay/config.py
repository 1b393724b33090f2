"""
Submission relay configuration parameters.

Parameters are read from the environment by :func:`load`, and collected in a
:class:`.Settings` instance that is passed to each component when it is
constructed. Nothing here is validated eagerly; a missing required value is
reported by the component that needs it, when it needs it.
"""

import os
import warnings
from typing import Mapping, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Settings:
    """Configuration for a single relay run."""

    loglevel: int = field(default=20)
    """
    Logging verbosity.

    See `https://docs.python.org/3/library/logging.html#levels`_.
    """

    # --- OBJECT STORAGE ---

    storage_project_id: Optional[str] = field(default=None)
    """Google Cloud project that owns the storage bucket."""

    storage_bucket: Optional[str] = field(default=None)
    """Name of the bucket into which submissions are published."""

    credential_json: Optional[str] = field(default=None)
    """
    Base64-encoded service account key (JSON).

    Must contain at least ``client_email`` and ``private_key``.
    """

    # --- MAIL DELIVERY ---

    mail_api_key: Optional[str] = field(default=None)
    """API key for the SendGrid mail service."""

    template_success: Optional[str] = field(default=None)
    """Dynamic template used when the submission was published."""

    template_failed: Optional[str] = field(default=None)
    """Dynamic template used when the submission could not be retrieved."""

    template_empty_file: Optional[str] = field(default=None)
    """Dynamic template used when the submitted file was empty."""

    mail_sender: str = field(default='contact@srikanthnandikonda.me')
    """Sender address for status e-mail."""

    mail_asm_group_id: int = field(default=35630)
    """Unsubscribe group attached to every status e-mail."""

    # --- LEDGER ---

    ledger_table: str = field(default='assignment-submissions')
    """Name of the DynamoDB table in which outcomes are recorded."""

    aws_region: str = field(default='us-east-1')
    """Default region for calling AWS services."""

    dynamodb_endpoint: Optional[str] = field(default=None)
    """
    Alternate endpoint for connecting to DynamoDB.

    If ``None``, uses the boto3 defaults for the :attr:`aws_region`. This is
    here mainly to support development with localstack or DynamoDB Local.
    """

    # --- TRANSFER ---

    scratch_dir: str = field(default='/tmp')
    """Directory in which submissions are staged before publishing."""

    fetch_max_hops: int = field(default=1)
    """Number of redirects that will be followed when retrieving a file."""

    fetch_timeout: Optional[float] = field(default=None)
    """Seconds to wait on the source server. ``None`` waits indefinitely."""


def load(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Load :class:`.Settings` from the environment.

    Parameters
    ----------
    environ : mapping
        Source of configuration values. Defaults to :data:`os.environ`.

    Returns
    -------
    :class:`.Settings`

    """
    if environ is None:
        environ = os.environ

    timeout = environ.get('FETCH_TIMEOUT')
    settings = Settings(
        loglevel=int(environ.get('LOGLEVEL', '20')),
        storage_project_id=environ.get('GCP_PROJECT_ID'),
        storage_bucket=environ.get('GCP_BUCKET_NAME'),
        credential_json=environ.get('GCP_SERVICE_ACCOUNT_KEY'),
        mail_api_key=environ.get('SG_API_KEY'),
        template_success=environ.get('TEMPLATE_ID'),
        template_failed=environ.get('TEMPLATE_ID_FAILED'),
        template_empty_file=environ.get('TEMPLATE_ID_EMPTY_FILE'),
        mail_sender=environ.get('MAIL_SENDER',
                                'contact@srikanthnandikonda.me'),
        mail_asm_group_id=int(environ.get('MAIL_ASM_GROUP_ID', '35630')),
        ledger_table=environ.get('LEDGER_TABLE', 'assignment-submissions'),
        aws_region=environ.get('AWS_REGION', 'us-east-1'),
        dynamodb_endpoint=environ.get('DYNAMODB_ENDPOINT'),
        scratch_dir=environ.get('SCRATCH_DIR', '/tmp'),
        fetch_max_hops=int(environ.get('FETCH_MAX_HOPS', '1')),
        fetch_timeout=float(timeout) if timeout else None
    )

    if not settings.credential_json:
        warnings.warn('GCP_SERVICE_ACCOUNT_KEY is not set; submissions'
                      ' cannot be published!')
    if not settings.mail_api_key:
        warnings.warn('SG_API_KEY is not set; status e-mail cannot be sent!')
    if settings.fetch_max_hops != 1:
        warnings.warn('Redirect cap is not 1; sources that redirect more'
                      ' than once will be handled differently.')
    return settings
