import pytest

from lifeline.errors import (
    CircularDependencyError,
    MissingWorkError,
    TaskRegistrationError,
    UnknownTaskError,
)
from lifeline.task_registry import TaskRegistry


def test_register_stores_task_details():
    registry = TaskRegistry()

    task = registry.register("db:migrate", lambda: None, prerequisites="environment", description="Migrate")

    assert task.prerequisites == ("environment",)
    assert task.description == "Migrate"
    assert "db:migrate" in registry
    assert registry.names() == ["db:migrate"]
    assert len(registry) == 1


def test_register_requires_body():
    with pytest.raises(MissingWorkError):
        TaskRegistry().register("empty", None)


def test_register_rejects_duplicate_names():
    registry = TaskRegistry()
    registry.register("job", lambda: None)

    with pytest.raises(TaskRegistrationError, match="already registered"):
        registry.register("job", lambda: None)


def test_invoke_runs_prerequisites_first_in_order():
    calls = []
    registry = TaskRegistry()
    registry.register("environment", lambda: calls.append("environment"))
    registry.register("config", lambda: calls.append("config"), prerequisites=["environment"])
    registry.register("job", lambda: calls.append("job"), prerequisites=["config", "environment"])

    registry.invoke("job")

    assert calls == ["environment", "config", "job"]


def test_invoke_runs_each_task_once_until_reenabled():
    calls = []
    registry = TaskRegistry()
    registry.register("job", lambda: calls.append("job"))

    registry.invoke("job")
    registry.invoke("job")
    assert calls == ["job"]

    registry.reenable("job")
    registry.invoke("job")
    assert calls == ["job", "job"]


def test_execute_ignores_prerequisites_and_invocation_state():
    calls = []
    registry = TaskRegistry()
    registry.register("environment", lambda: calls.append("environment"))
    registry.register("job", lambda: calls.append("job") or "done", prerequisites=["environment"])

    registry.invoke("job")
    result = registry.execute("job")

    assert result == "done"
    assert calls == ["environment", "job", "job"]


def test_invoke_unknown_task_raises():
    with pytest.raises(UnknownTaskError, match="missing"):
        TaskRegistry().invoke("missing")


def test_invoke_unknown_prerequisite_raises():
    registry = TaskRegistry()
    registry.register("job", lambda: None, prerequisites=["environment"])

    with pytest.raises(UnknownTaskError):
        registry.invoke("job")


def test_invoke_detects_cycles():
    registry = TaskRegistry()
    registry.register("a", lambda: None, prerequisites=["b"])
    registry.register("b", lambda: None, prerequisites=["a"])

    with pytest.raises(CircularDependencyError) as excinfo:
        registry.invoke("a")

    assert excinfo.value.chain == ["a", "b", "a"]


def test_invoke_propagates_body_errors():
    registry = TaskRegistry()

    def boom():
        raise ValueError("boom")

    registry.register("job", boom)

    with pytest.raises(ValueError, match="boom"):
        registry.invoke("job")
