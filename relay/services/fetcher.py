"""Retrieves submitted files from their source URLs."""

import asyncio
import logging
import os
from typing import Optional

import httpx

from ..config import Settings
from ..domain import TransferOutcome

logger = logging.getLogger(__name__)


class Fetcher:
    """
    Streams a remote resource into a local staging file.

    Redirects are followed manually, so that the number of hops is capped
    explicitly. A redirect that arrives once :attr:`max_hops` hops have been
    taken, or a 3xx response without a ``Location`` header, is treated like
    any other unexpected status.
    """

    SCHEMES = ('http', 'https')
    CHUNK_SIZE = 64 * 1024

    def __init__(self, max_hops: int = 1, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None) \
            -> None:
        self.max_hops = max_hops
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> 'Fetcher':
        """Get a :class:`.Fetcher` configured by ``settings``."""
        return cls(max_hops=settings.fetch_max_hops,
                   timeout=settings.fetch_timeout)

    async def fetch(self, url: Optional[str], destination: str) \
            -> TransferOutcome:
        """
        Retrieve ``url`` and write the response body to ``destination``.

        Transport errors, unexpected statuses and empty bodies are reported
        in the returned outcome rather than raised.

        Parameters
        ----------
        url : str
            An HTTP or HTTPS URL.
        destination : str
            Writable local path. An existing file is overwritten.

        Returns
        -------
        :class:`.TransferOutcome`

        """
        try:
            target = httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            logger.error('Invalid submission URL %r: %s', url, e)
            return TransferOutcome.failed(f'Invalid URL: {url!r}')
        if target.scheme not in self.SCHEMES:
            logger.error('Unsupported submission URL %r', url)
            return TransferOutcome.failed(f'Unsupported URL: {url!r}')

        hops = 0
        async with httpx.AsyncClient(follow_redirects=False,
                                     timeout=self.timeout,
                                     transport=self.transport) as client:
            while True:
                try:
                    async with client.stream('GET', target) as response:
                        if response.status_code == httpx.codes.OK:
                            return await self._stage(response, destination)
                        if response.has_redirect_location \
                                and hops < self.max_hops:
                            hops += 1
                            target = response.url.join(
                                response.headers['Location']
                            )
                            logger.info('Redirecting to: %s', target)
                            continue
                        msg = ('Failed to download file. Status code:'
                               f' {response.status_code}')
                        logger.error(msg)
                        return TransferOutcome.failed(msg)
                except (httpx.HTTPError, httpx.InvalidURL) as e:
                    logger.error('Error during download: %s', e)
                    return TransferOutcome.failed(
                        f'Error during download: {e}'
                    )
                except OSError as e:
                    logger.error('Could not stage %s: %s', destination, e)
                    return TransferOutcome.failed(f'Could not stage: {e}')

    async def _stage(self, response: httpx.Response, destination: str) \
            -> TransferOutcome:
        """
        Stream the body of ``response`` to ``destination``.

        File operations are run in the default executor, so that writing to
        slow scratch storage does not stall the event loop.
        """
        loop = asyncio.get_running_loop()
        f = await loop.run_in_executor(None, open, destination, 'wb')
        try:
            async for chunk in response.aiter_bytes(self.CHUNK_SIZE):
                await loop.run_in_executor(None, f.write, chunk)
        finally:
            await loop.run_in_executor(None, f.close)
        logger.info('Download completed: %s', destination)

        size = await loop.run_in_executor(None, os.path.getsize, destination)
        if size == 0:
            logger.error('File size is 0')
            return TransferOutcome.empty(destination)
        return TransferOutcome.succeeded(destination, size)
