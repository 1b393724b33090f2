"""Bootstrap the ledger table."""

import logging
import time

from . import config
from .services import Recorder

logger = logging.getLogger(__name__)


def bootstrap(recorder: Recorder, max_wait: int = 60) -> bool:
    """
    Wait for the ledger to be reachable, and create its table if necessary.

    Returns ``True`` if the table was created.
    """
    wait = 2
    start = time.time()
    while not recorder.is_available():
        if time.time() - start >= max_wait:
            break
        logger.info(f'...waiting {wait} seconds...')
        time.sleep(wait)
        wait *= 2
    if recorder.table_exists():
        logger.debug('Bootstrap: Ledger table exists!')
        return False
    logger.info('Bootstrap: Create ledger table %s', recorder.table_name)
    recorder.create_table()
    return True


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    bootstrap(Recorder.from_settings(config.load()))
