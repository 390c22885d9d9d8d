"""Command-line entry point for lifeline tasks.

Usage:
    lifeline snapshot
    lifeline tasks myproject.jobs:registry
    lifeline invoke myproject.jobs:registry reports:lifeline

Schedule ``invoke ... <namespace>:lifeline`` from cron; a run that finds an
identical command already in the process table exits without doing work.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import List, Optional, Sequence

from .config import ConfigurationError
from .errors import LifelineError
from .logging_config import setup_logging
from .process_snapshot import take_snapshot
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def load_registry(target: str) -> TaskRegistry:
    """Resolve ``module.path:attribute`` to a TaskRegistry."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise LifelineError(f"Registry target must look like 'module.path:attribute' (got {target!r})")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise LifelineError(f"Unable to import registry module {module_name!r}: {exc}") from exc

    try:
        candidate = getattr(module, attribute)
    except AttributeError as exc:
        raise LifelineError(f"Module {module_name!r} has no attribute {attribute!r}") from exc

    if not isinstance(candidate, TaskRegistry) and callable(candidate):
        candidate = candidate()
    if not isinstance(candidate, TaskRegistry):
        raise LifelineError(f"{target!r} does not provide a TaskRegistry")
    return candidate


def _cmd_snapshot(args: argparse.Namespace) -> int:
    entries = take_snapshot()
    if not entries:
        sys.stderr.write("No process data available\n")
        return 1
    for entry in entries:
        print(f"{entry.pid:>7} {entry.command}")
    return 0


def _cmd_tasks(args: argparse.Namespace) -> int:
    registry = load_registry(args.target)
    tasks = sorted(registry.tasks(), key=lambda task: task.name)
    if not tasks:
        return 0
    width = max(len(task.name) for task in tasks)
    for task in tasks:
        if task.description:
            print(f"{task.name:<{width}}  # {task.description}")
        else:
            print(task.name)
    return 0


def _cmd_invoke(args: argparse.Namespace) -> int:
    registry = load_registry(args.target)
    for name in args.task_names:
        logger.debug("Invoking %s from %s", name, args.target)
        registry.invoke(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifeline", description="Run scheduled tasks one process at a time.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--service-name", default=None, help="Name of the log file written to LIFELINE_LOG_DIR")
    subparsers = parser.add_subparsers(dest="command", required=True)

    snapshot_parser = subparsers.add_parser("snapshot", help="Print the current process table")
    snapshot_parser.set_defaults(handler=_cmd_snapshot)

    tasks_parser = subparsers.add_parser("tasks", help="List registered tasks")
    tasks_parser.add_argument("target", help="module.path:attribute of a TaskRegistry")
    tasks_parser.set_defaults(handler=_cmd_tasks)

    invoke_parser = subparsers.add_parser("invoke", help="Invoke one or more tasks")
    invoke_parser.add_argument("target", help="module.path:attribute of a TaskRegistry")
    invoke_parser.add_argument("task_names", nargs="+", metavar="TASK", help="Task names to invoke in order")
    invoke_parser.set_defaults(handler=_cmd_invoke)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        setup_logging(args.service_name, level=args.log_level)
        return args.handler(args)
    except (LifelineError, ConfigurationError) as exc:
        sys.stderr.write(f"{exc}\n")
        return 1


def run(argv: Optional[List[str]] = None) -> None:
    raise SystemExit(main(argv))


__all__ = ["build_parser", "load_registry", "main", "run"]
