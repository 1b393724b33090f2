"""Integrations with the systems that the relay reads from and writes to."""

from .fetcher import Fetcher
from .storage import Publisher
from .mail import Notifier
from .ledger import Recorder
