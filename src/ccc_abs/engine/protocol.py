"""
Execution protocol primitives.

Tests are recorded into their test set through ``execute_test`` and
``execute_invasive_test``; failures are written through
``set_result_failure`` so that ``passed`` and ``message`` always agree;
``test_set_result_setter`` rolls test results up into the verdict of
the test set.
"""

from __future__ import annotations

from typing import Callable

from ccc_abs.models import TestResult, TestSetResult
from ccc_abs.observability.logging import get_logger

logger = get_logger("engine.protocol")

INVASIVE_SKIP_MESSAGE = "skipped: invasive test"


def set_result_failure(result: TestResult, message: str) -> None:
    """Mark a test result as failed with the given message."""
    result.passed = False
    result.message = message


def execute_test(test_set: TestSetResult, test_fn: Callable[[], TestResult]) -> TestResult:
    """
    Run a test and record its result in the test set.

    The result is keyed by its ``function`` id. Insertion order is the
    execution order.
    """
    result = test_fn()
    test_set.tests[result.function] = result
    return result


def execute_invasive_test(
    test_set: TestSetResult,
    test_fn: Callable[[], TestResult],
    invasive: bool,
    test_id: str,
    description: str = "",
) -> TestResult:
    """
    Run a test that mutates the target, if invasive tests are enabled.

    When they are not, the test is not invoked and a failed placeholder
    result is recorded under ``test_id`` instead.
    """
    if invasive:
        return execute_test(test_set, test_fn)

    logger.test_skipped(test_id)
    skipped = TestResult(
        description=description,
        function=test_id,
        passed=False,
        message=INVASIVE_SKIP_MESSAGE,
    )
    test_set.tests[test_id] = skipped
    return skipped


def test_set_result_setter(
    success_message: str, failure_message: str, test_set: TestSetResult
) -> None:
    """
    Set the verdict of a test set from its test results.

    The test set passes when every recorded test passed, which is
    vacuously true for a test set with no recorded tests.
    """
    for result in test_set.tests.values():
        if not result.passed:
            test_set.passed = False
            test_set.message = failure_message
            return

    test_set.passed = True
    test_set.message = success_message


# Not a pytest test function
test_set_result_setter.__test__ = False  # type: ignore[attr-defined]
