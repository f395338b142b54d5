"""Shared builders for result trees, coverage data and console capture."""

from __future__ import annotations

import io
from typing import Optional

import pytest

from remote_testkit.config import ReporterConfig
from remote_testkit.events import EventHub
from remote_testkit.reporters.console import ConsoleReporter
from remote_testkit.runners.results import ErrorInfo, Suite, Test


def make_session_suite(
    name: str,
    session_id: str,
    passed: int = 0,
    failed: int = 0,
    skipped: int = 0,
    error: Optional[ErrorInfo] = None,
) -> Suite:
    """Root suite holding one child suite with the requested outcomes."""
    tests = []
    for i in range(passed):
        tests.append(Test(id=f"{name} - pass {i}", name=f"pass {i}", session_id=session_id))
    for i in range(failed):
        tests.append(
            Test(
                id=f"{name} - fail {i}",
                name=f"fail {i}",
                session_id=session_id,
                error=ErrorInfo("AssertionError", f"failure {i}"),
            )
        )
    for i in range(skipped):
        tests.append(Test(id=f"{name} - skip {i}", name=f"skip {i}", session_id=session_id, skipped="skipped"))
    child = Suite(id=f"{name} - main", name="main", session_id=session_id, has_parent=True, tests=tests)
    return Suite(id=name, name=name, session_id=session_id, error=error, tests=[child])


def file_coverage(path: str, hits, fn_hits=(), branch_hits=()) -> dict:
    """istanbul file record with one statement per line, starting at line 1."""
    return {
        "path": path,
        "statementMap": {
            str(i): {"start": {"line": i + 1, "column": 0}, "end": {"line": i + 1, "column": 10}}
            for i in range(len(hits))
        },
        "fnMap": {
            str(i): {"name": f"fn{i}", "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 1}}}
            for i in range(len(fn_hits))
        },
        "branchMap": {
            str(i): {"type": "if", "locations": [{}, {}]} for i in range(len(branch_hits))
        },
        "s": {str(i): h for i, h in enumerate(hits)},
        "f": {str(i): h for i, h in enumerate(fn_hits)},
        "b": {str(i): list(h) for i, h in enumerate(branch_hits)},
    }


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def hub() -> EventHub:
    return EventHub()


@pytest.fixture
def reporter(hub: EventHub, output: io.StringIO) -> ConsoleReporter:
    rep = ConsoleReporter(hub, ReporterConfig(), output)
    hub.register(rep)
    return rep


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Keep rich output free of colour codes and wide enough for report tables."""
    for var in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("COLUMNS", "200")
