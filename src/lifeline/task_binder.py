"""
Lifeline task definitions.

Defines three tasks in a namespace:

* ``<namespace>:run`` runs the supplied body
* ``<namespace>:lifeline`` runs ``<namespace>:run`` only if it is not already running
* ``<namespace>:terminate`` force kills running ``<namespace>:lifeline`` processes

Usage:
    from lifeline.task_binder import define_lifeline_tasks
    from lifeline.task_registry import TaskRegistry

    registry = TaskRegistry()
    define_lifeline_tasks(registry, "reports", build_reports)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .errors import MissingWorkError
from .lifeline_guard import GuardOutcome, SnapshotProvider, guard
from .process_terminator import terminate_lifelines
from .task_registry import TaskBody, TaskRegistry

Terminator = Callable[[str], Any]


@dataclass(frozen=True)
class LifelineTaskNames:
    namespace: str

    @property
    def run(self) -> str:
        return f"{self.namespace}:run"

    @property
    def lifeline(self) -> str:
        return f"{self.namespace}:lifeline"

    @property
    def terminate(self) -> str:
        return f"{self.namespace}:terminate"

    @property
    def all(self) -> List[str]:
        return [self.run, self.lifeline, self.terminate]


class LifelineTaskBinder:
    """Registers the run, lifeline and terminate tasks for one namespace."""

    def __init__(
        self,
        registry: TaskRegistry,
        namespace: str,
        *,
        snapshot_provider: Optional[SnapshotProvider] = None,
        terminator: Optional[Terminator] = None,
    ) -> None:
        self.registry = registry
        self.names = LifelineTaskNames(str(namespace))
        self._snapshot_provider = snapshot_provider
        self._terminator = terminator or terminate_lifelines

    def bind(self, body: Optional[TaskBody], *, prerequisites: Optional[Iterable[str] | str] = None) -> LifelineTaskNames:
        if body is None or not callable(body):
            raise MissingWorkError("You must pass in a callable to be the body of the run task")

        self._define_run_task(body, prerequisites)
        self._define_lifeline_task()
        self._define_terminate_task()
        return self.names

    def _define_run_task(self, body: TaskBody, prerequisites: Optional[Iterable[str] | str]) -> None:
        self.registry.register(
            self.names.run,
            body,
            prerequisites=prerequisites,
            description=f"Runs the {self.names.run} task",
        )

    def _define_lifeline_task(self) -> None:
        def lifeline() -> GuardOutcome:
            return guard(lambda: self.registry.invoke(self.names.run), snapshot_provider=self._snapshot_provider)

        self.registry.register(
            self.names.lifeline,
            lifeline,
            description=f"A lifeline task for executing only one process of {self.names.run} at a time",
        )

    def _define_terminate_task(self) -> None:
        def terminate() -> Any:
            return self._terminator(self.names.lifeline)

        self.registry.register(
            self.names.terminate,
            terminate,
            description=f"Terminates any running {self.names.lifeline} tasks",
        )


def define_lifeline_tasks(
    registry: TaskRegistry,
    namespace: str,
    body: Optional[TaskBody],
    *,
    prerequisites: Optional[Iterable[str] | str] = None,
    snapshot_provider: Optional[SnapshotProvider] = None,
    terminator: Optional[Terminator] = None,
) -> LifelineTaskNames:
    """
    Define the run, lifeline and terminate tasks for *namespace*.

    Args:
        registry: Registry to add the tasks to
        namespace: Namespace for the task names; make it unique per project
        body: Callable that is the body of the run task
        prerequisites: Task names that must run before the run task
        snapshot_provider: Snapshot source for the lifeline guard
        terminator: Callable receiving the lifeline task name; defaults to ``terminate_lifelines``

    Returns:
        The names of the defined tasks

    Raises:
        MissingWorkError: If *body* is not supplied
    """
    binder = LifelineTaskBinder(
        registry,
        namespace,
        snapshot_provider=snapshot_provider,
        terminator=terminator,
    )
    return binder.bind(body, prerequisites=prerequisites)


__all__ = ["LifelineTaskBinder", "LifelineTaskNames", "Terminator", "define_lifeline_tasks"]
