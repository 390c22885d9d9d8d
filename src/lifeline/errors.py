"""Exception classes for the lifeline guard and its task layer.

Exception classes support two patterns:
1. No-argument raise: raise ProcessDataUnavailableError()
2. Contextual attributes: err = SelfNotFoundError(pid=10, entries=[...]); raise err
"""

from __future__ import annotations

from typing import Any, Sequence


class LifelineError(Exception):
    """Base exception for all lifeline errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Lifeline error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class MissingWorkError(LifelineError, TypeError):
    """A block of work is required but none was supplied."""


class ProcessDataUnavailableError(LifelineError, RuntimeError):
    """No process data available from the process listing. Aborting."""


class SelfNotFoundError(LifelineError, RuntimeError):
    """The current process could not be found in the process listing."""

    pid: int
    entries: Sequence[Any]

    @classmethod
    def for_pid(cls, pid: int, entries: Sequence[Any]) -> "SelfNotFoundError":
        """Create error listing every entry that was considered."""
        dump = "\n".join(repr(entry) for entry in entries)
        message = f"Unable to find self (PID={pid}) in process list. Exiting.\n{dump}"
        return cls(message, pid=pid, entries=list(entries))


class TaskError(LifelineError):
    """Task registry operation failed."""


class UnknownTaskError(TaskError):
    """No task is registered under the requested name."""

    @classmethod
    def for_name(cls, name: str) -> "UnknownTaskError":
        return cls(f"Don't know how to run task '{name}'", name=name)


class TaskRegistrationError(TaskError):
    """A task could not be registered."""

    @classmethod
    def duplicate(cls, name: str) -> "TaskRegistrationError":
        return cls(f"Task '{name}' is already registered", name=name)


class CircularDependencyError(TaskError):
    """Task prerequisites form a cycle."""

    @classmethod
    def for_chain(cls, chain: Sequence[str]) -> "CircularDependencyError":
        return cls(f"Circular dependency detected: {' => '.join(chain)}", chain=list(chain))


__all__ = [
    "CircularDependencyError",
    "LifelineError",
    "MissingWorkError",
    "ProcessDataUnavailableError",
    "SelfNotFoundError",
    "TaskError",
    "TaskRegistrationError",
    "UnknownTaskError",
]
