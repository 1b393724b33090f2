"""Builds the relay process from configuration."""

import logging
from typing import Optional

from .config import Settings
from .process import RelaySubmission
from .services import Fetcher, Notifier, Publisher, Recorder

logger = logging.getLogger(__name__)


def create_process(settings: Settings,
                   process_id: Optional[str] = None) -> RelaySubmission:
    """Create a new :class:`.RelaySubmission` with its integrations."""
    process = RelaySubmission(fetcher=Fetcher.from_settings(settings),
                              publisher=Publisher.from_settings(settings),
                              notifier=Notifier.from_settings(settings),
                              recorder=Recorder.from_settings(settings),
                              scratch_dir=settings.scratch_dir,
                              process_id=process_id)
    logger.debug('Created %s %s', process.name, process.process_id)
    return process
