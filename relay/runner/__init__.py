"""Provides process runners, which carry out the steps of a process."""

from .base import ProcessRunner
