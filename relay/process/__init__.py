"""
Processes supported by this application.

A **process** is a set of one or more related steps that should be carried out
in order, for a single submission event. If a step in a process fails, the
subsequent steps are not carried out.

Processes are implemented by defining a class that inherits from
:class:`.Process`\\.
"""

from .base import Process, ProcessType, step
from .relay_submission import RelaySubmission
