"""
Entry point for relaying a submission.

:func:`handler` is invoked once per notification by the hosting environment
(e.g. AWS Lambda subscribed to an SNS topic). Any exception raised here marks
the invocation as failed; whether the notification is redelivered is up to
the hosting environment.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional

from . import config
from .factory import create_process
from .runner import ProcessRunner
from .serializer import parse_envelope

logger = logging.getLogger(__name__)


async def handle(event: Mapping[str, Any], context: Optional[Any] = None,
                 settings: Optional[config.Settings] = None) -> str:
    """
    Relay the submission carried by ``event``.

    Parameters
    ----------
    event : dict
        SNS notification envelope.
    context : object
        Invocation context provided by the hosting environment, if any.
    settings : :class:`.config.Settings`
        Defaults to :func:`.config.load`.

    Returns
    -------
    str
        The log stream name from ``context``, or else the process ID; either
        can be used to find the logs for this invocation.

    """
    if settings is None:
        settings = config.load()
    logging.getLogger(__package__).setLevel(settings.loglevel)

    logger.info('Start of handler function')
    try:
        submission = parse_envelope(event)
        logger.info('Relaying submission %s for assignment %s',
                    submission.submission_id, submission.assignment_id)
        process = create_process(settings)
        await ProcessRunner(process).run(submission)
    except Exception as e:
        logger.error('Error in handler function: %s', e)
        raise
    logger.info('End of handler function')
    return getattr(context, 'log_stream_name', None) or process.process_id


def handler(event: Mapping[str, Any], context: Optional[Any] = None) -> str:
    """Synchronous entry point; see :func:`handle`."""
    logging.basicConfig()
    return asyncio.run(handle(event, context))
