"""
Declarative test requirement definitions and their interpreter.

A TRDefinition describes a test requirement as data: its catalog
metadata, the ordered steps to run, and the messages used when rolling
the step results up. ``run_test_set`` is the single interpreter that
turns a definition into a TestSetResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from ccc_abs.engine.protocol import (
    execute_invasive_test,
    execute_test,
    set_result_failure,
    test_set_result_setter,
)
from ccc_abs.models import TestResult, TestSetResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

logger = logging.getLogger(__name__)

DOCS_URL = "https://maintainer.com/docs/raids/ABS"

TestCheck = Callable[["Environment", TestResult], None]


@dataclass(frozen=True)
class TestStep:
    """
    One test inside a test requirement.

    Attributes:
        id: Test id, recorded as ``TestResult.function``
        description: Why the test exists
        check: Function that evaluates the test into the given result
        invasive: Whether the test mutates the target
        run_if: Id of an earlier test that must have passed for this
            test to run
    """

    __test__ = False

    id: str
    description: str
    check: TestCheck
    invasive: bool = False
    run_if: str | None = None


@dataclass(frozen=True)
class TRDefinition:
    """
    A test requirement of the control catalog.

    When ``statement`` is set the requirement cannot be asserted against
    a single resource: no tests run and the test set fails with the
    statement as its message.
    """

    id: str
    control_id: str
    description: str
    success_message: str = ""
    failure_message: str = ""
    steps: tuple[TestStep, ...] = field(default_factory=tuple)
    statement: str | None = None
    provisional: bool = False
    docs_url: str = DOCS_URL

    @property
    def invasive(self) -> bool:
        """Check if any step mutates the target."""
        return any(step.invasive for step in self.steps)


def run_step(step: TestStep, env: Environment) -> TestResult:
    """
    Evaluate one step into a fresh TestResult.

    Exceptions escaping the check are recorded as a test failure so that
    the rest of the run continues.
    """
    result = TestResult(description=step.description, function=step.id)
    try:
        step.check(env, result)
    except Exception as e:
        logger.exception(f"Test {step.id} raised an unexpected error")
        set_result_failure(result, f"Unexpected error: {e}")
    return result


def run_test_set(definition: TRDefinition, env: Environment) -> TestSetResult:
    """
    Run a test requirement against the environment.

    Args:
        definition: Test requirement to run
        env: Environment carrying the target snapshot and collaborators

    Returns:
        Finalized TestSetResult
    """
    result = TestSetResult(
        control_id=definition.control_id,
        description=definition.description,
        docs_url=definition.docs_url,
        provisional=definition.provisional,
    )

    if definition.statement is not None:
        result.passed = False
        result.message = definition.statement
        return result

    for step in definition.steps:
        if step.run_if is not None:
            gate = result.tests.get(step.run_if)
            if gate is None or not gate.passed:
                logger.debug(f"Not running {step.id}, {step.run_if} did not pass")
                continue

        def test_fn(step: TestStep = step) -> TestResult:
            return run_step(step, env)

        if step.invasive:
            execute_invasive_test(
                result, test_fn, env.invasive, step.id, step.description
            )
        else:
            execute_test(result, test_fn)

    test_set_result_setter(definition.success_message, definition.failure_message, result)
    return result
