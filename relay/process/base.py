"""Provides the base representation of a process."""

from typing import Callable, Optional, Tuple, Any
from collections import OrderedDict
from uuid import uuid4

from ..domain import State, SubmissionEvent


class ProcessType(type):
    """
    Metaclass for :class:`.Process`.

    The goal is to preserve the order of steps based on the order in which they
    are defined on a :class:`.Process` subclass.

    Adds a property called ``steps`` to the class, which is a list of instance
    methods that should be called in order to carry out the process.
    """

    @classmethod
    def __prepare__(self, name, bases):
        """Use a :class:`collections.OrderedDict` instead of a ``dict``."""
        return OrderedDict()

    def __new__(self, name: str, bases: Tuple[type], attrs: dict):
        """Identify the ordered steps in the process."""
        steps = [step for base in bases for step in getattr(base, 'steps', [])]
        steps += [obj for obj in attrs.values() if is_step(obj)]
        attrs['steps'] = steps
        return type.__new__(self, name, bases, attrs)


def step(state: State) -> Callable:
    """
    Mark an instance method as a step.

    Parameters
    ----------
    state : :class:`.State`
        The state that the process enters when the step succeeds.
    """
    def deco(func: Callable) -> Callable:
        setattr(func, '__is_step__', True)
        setattr(func, 'name', func.__name__)
        setattr(func, 'state', state)
        return func
    return deco


def is_step(func: Callable) -> bool:
    return getattr(func, '__is_step__', None) is True


class Process(metaclass=ProcessType):
    """
    A series of steps carried out for a single submission event.

    Each step is a coroutine method with the signature
    ``(previous, event, emit)``, where ``previous`` is the return value of the
    preceding step (``None`` for the first step).

    The runner enters :attr:`.State.START` before the first step, the state
    given to :func:`step` when a step succeeds, and :attr:`.State.FAILED`
    when one raises; steps do not emit those themselves. ``emit`` is passed
    along only for a step that must record an intermediate state of its own.
    """

    def __init__(self, process_id: Optional[str] = None) -> None:
        if process_id is None:
            process_id = str(uuid4())
        self.process_id = process_id

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def step_names(self):
        return [step.name for step in self.steps]

    def before_start(self, event: SubmissionEvent,
                     emit: Callable[[State], Any]) -> None:
        """Enter the start state before the first step."""
        emit(State.START)

    def on_failure(self, step_name: str, event: SubmissionEvent,
                   emit: Callable[[State], Any]) -> None:
        """Enter the failed state when a step fails."""
        emit(State.FAILED)

    def on_success(self, step_name: str, event: SubmissionEvent,
                   emit: Callable[[State], Any]) -> None:
        """Enter the state reached by completing ``step_name``."""
        emit(getattr(self, step_name).state)
