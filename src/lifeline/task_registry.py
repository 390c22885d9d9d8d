"""Named, described, prerequisite-ordered units of work."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import (
    CircularDependencyError,
    MissingWorkError,
    TaskRegistrationError,
    UnknownTaskError,
)

logger = logging.getLogger(__name__)

TaskBody = Callable[[], Any]


@dataclass
class Task:
    """A registered unit of work."""

    name: str
    body: TaskBody
    prerequisites: Tuple[str, ...] = ()
    description: str = ""
    already_invoked: bool = False


def _normalize_prerequisites(prerequisites: Optional[Iterable[str] | str]) -> Tuple[str, ...]:
    if prerequisites is None:
        return ()
    if isinstance(prerequisites, str):
        return (prerequisites,)
    return tuple(str(name) for name in prerequisites)


class TaskRegistry:
    """
    Registry of named tasks.

    ``invoke`` runs a task's prerequisites depth-first before its body, and each
    task runs at most once until ``reenable`` is called for it.
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}

    def register(
        self,
        name: str,
        body: Optional[TaskBody],
        *,
        prerequisites: Optional[Iterable[str] | str] = None,
        description: str = "",
    ) -> Task:
        if body is None or not callable(body):
            raise MissingWorkError(f"You must pass in a callable to be the body of task '{name}'")
        if name in self._tasks:
            raise TaskRegistrationError.duplicate(name)

        task = Task(
            name=name,
            body=body,
            prerequisites=_normalize_prerequisites(prerequisites),
            description=description,
        )
        self._tasks[name] = task
        logger.debug("Registered task %s (prerequisites: %s)", name, ", ".join(task.prerequisites) or "none")
        return task

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError.for_name(name) from None

    def names(self) -> List[str]:
        return list(self._tasks)

    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def invoke(self, name: str) -> None:
        """Run prerequisites then the body of *name*, unless already invoked."""
        self._invoke_with_chain(name, ())

    def execute(self, name: str) -> Any:
        """Run only the body of *name*, ignoring prerequisites and invocation state."""
        task = self.get(name)
        logger.debug("Executing task %s", name)
        return task.body()

    def reenable(self, name: str) -> None:
        self.get(name).already_invoked = False

    def _invoke_with_chain(self, name: str, chain: Sequence[str]) -> None:
        if name in chain:
            raise CircularDependencyError.for_chain([*chain, name])

        task = self.get(name)
        if task.already_invoked:
            logger.debug("Task %s already invoked; skipping", name)
            return
        task.already_invoked = True

        new_chain = (*chain, name)
        for prerequisite in task.prerequisites:
            self._invoke_with_chain(prerequisite, new_chain)

        logger.debug("Invoking task %s", name)
        task.body()


__all__ = ["Task", "TaskBody", "TaskRegistry"]
