"""
Unit tests for the execution engine.

Tests the protocol primitives, the test requirement interpreter, the
tactic registry and the assessment runner.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ccc_abs.engine import (
    INVASIVE_SKIP_MESSAGE,
    AssessmentRunner,
    EngineError,
    TacticRegistry,
    TestStep,
    TRDefinition,
    UnknownTacticError,
    execute_invasive_test,
    execute_test,
    run_test_set,
    set_result_failure,
    test_set_result_setter,
)
from ccc_abs.engine.definitions import DOCS_URL
from ccc_abs.models import NOT_STARTED_MESSAGE, TestResult, TestSetResult


def passing(env, result):
    result.passed = True
    result.message = "ok"


def failing(env, result):
    set_result_failure(result, "not ok")


def raising(env, result):
    raise RuntimeError("boom")


def make_test_set() -> TestSetResult:
    return TestSetResult(control_id="CCC.C00", description="d", docs_url=DOCS_URL)


def make_result(function: str, passed: bool) -> TestResult:
    return TestResult(description="d", function=function, passed=passed)


class TestProtocol:
    """Tests for the protocol primitives."""

    def test_set_result_failure(self):
        """Test failure setter writes both fields."""
        result = make_result("T01", True)
        set_result_failure(result, "broken")

        assert result.passed is False
        assert result.message == "broken"

    def test_execute_test_records_in_execution_order(self):
        """Test results are keyed by function id in execution order."""
        test_set = make_test_set()
        for name in ("T03", "T01", "T02"):
            execute_test(test_set, lambda name=name: make_result(name, True))

        assert list(test_set.tests) == ["T03", "T01", "T02"]

    def test_execute_invasive_test_skips_when_disabled(self):
        """Test a disabled invasive test is recorded as a failed placeholder."""
        test_set = make_test_set()
        test_fn = MagicMock()

        skipped = execute_invasive_test(test_set, test_fn, False, "T01", "desc")

        test_fn.assert_not_called()
        assert skipped.passed is False
        assert skipped.message == INVASIVE_SKIP_MESSAGE
        assert test_set.tests["T01"] is skipped

    def test_execute_invasive_test_runs_when_enabled(self):
        """Test an enabled invasive test is invoked."""
        test_set = make_test_set()
        result = execute_invasive_test(
            test_set, lambda: make_result("T01", True), True, "T01"
        )

        assert result.passed is True
        assert test_set.tests["T01"].passed is True

    def test_result_setter_all_passed(self):
        """Test a test set passes when every test passed."""
        test_set = make_test_set()
        test_set.tests["T01"] = make_result("T01", True)
        test_set.tests["T02"] = make_result("T02", True)

        test_set_result_setter("yes", "no", test_set)

        assert test_set.passed is True
        assert test_set.message == "yes"

    def test_result_setter_any_failed(self):
        """Test a single failing test fails the test set."""
        test_set = make_test_set()
        test_set.tests["T01"] = make_result("T01", True)
        test_set.tests["T02"] = make_result("T02", False)

        test_set_result_setter("yes", "no", test_set)

        assert test_set.passed is False
        assert test_set.message == "no"

    def test_result_setter_empty_is_vacuously_passed(self):
        """Test a test set with no tests passes."""
        test_set = make_test_set()
        test_set_result_setter("yes", "no", test_set)

        assert test_set.passed is True

    def test_aggregation_is_monotone(self):
        """Test adding a failing test never turns a failing set into a passing one."""
        test_set = make_test_set()
        test_set.tests["T01"] = make_result("T01", False)
        test_set_result_setter("yes", "no", test_set)
        assert test_set.passed is False

        test_set.tests["T02"] = make_result("T02", True)
        test_set_result_setter("yes", "no", test_set)
        assert test_set.passed is False


class TestRunTestSet:
    """Tests for the test requirement interpreter."""

    @pytest.fixture
    def env(self):
        environment = MagicMock()
        environment.invasive = False
        return environment

    def test_new_test_set_defaults(self):
        """Test a test set starts as not started and failing."""
        test_set = make_test_set()

        assert test_set.passed is False
        assert test_set.message == NOT_STARTED_MESSAGE
        assert test_set.docs_url == "https://maintainer.com/docs/raids/ABS"

    def test_steps_run_in_order(self, env):
        """Test steps are recorded in declaration order."""
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            success_message="yes",
            failure_message="no",
            steps=(
                TestStep("CCC_X_TR01_T02", "second", passing),
                TestStep("CCC_X_TR01_T01", "first", passing),
            ),
        )

        result = run_test_set(definition, env)

        assert list(result.tests) == ["CCC_X_TR01_T02", "CCC_X_TR01_T01"]
        assert result.passed is True
        assert result.message == "yes"
        assert result.control_id == "CCC.X"
        assert result.tests["CCC_X_TR01_T02"].description == "second"

    def test_failing_step_fails_test_set(self, env):
        """Test one failing step fails the whole requirement."""
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            success_message="yes",
            failure_message="no",
            steps=(
                TestStep("T01", "a", passing),
                TestStep("T02", "b", failing),
            ),
        )

        result = run_test_set(definition, env)

        assert result.passed is False
        assert result.message == "no"
        assert result.tests["T02"].message == "not ok"

    def test_statement_short_circuits(self, env):
        """Test a statement requirement fails without running tests."""
        check = MagicMock()
        definition = TRDefinition(
            id="CCC_X_TR02",
            control_id="CCC.X",
            description="desc",
            steps=(TestStep("T01", "a", check),),
            statement="cannot be checked here",
        )

        result = run_test_set(definition, env)

        check.assert_not_called()
        assert result.passed is False
        assert result.message == "cannot be checked here"
        assert result.tests == {}

    def test_invasive_step_skipped_when_disabled(self, env):
        """Test a skipped invasive step is recorded and fails the set."""
        check = MagicMock()
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            success_message="yes",
            failure_message="no",
            steps=(
                TestStep("T01", "a", passing),
                TestStep("T02", "b", check, invasive=True),
            ),
        )

        result = run_test_set(definition, env)

        check.assert_not_called()
        assert result.tests["T02"].message == INVASIVE_SKIP_MESSAGE
        assert result.tests["T02"].description == "b"
        assert result.passed is False
        assert definition.invasive is True

    def test_invasive_step_runs_when_enabled(self, env):
        """Test invasive steps run with the opt-in."""
        env.invasive = True
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            success_message="yes",
            steps=(TestStep("T01", "a", passing, invasive=True),),
        )

        result = run_test_set(definition, env)

        assert result.passed is True

    def test_gated_step_not_run_when_gate_failed(self, env):
        """Test a step gated on a failed test is not recorded."""
        check = MagicMock()
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            failure_message="no",
            steps=(
                TestStep("T01", "a", failing),
                TestStep("T02", "b", check, run_if="T01"),
            ),
        )

        result = run_test_set(definition, env)

        check.assert_not_called()
        assert list(result.tests) == ["T01"]
        assert result.passed is False

    def test_gated_step_runs_when_gate_passed(self, env):
        """Test a step gated on a passed test runs."""
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            failure_message="no",
            steps=(
                TestStep("T01", "a", passing),
                TestStep("T02", "b", failing, run_if="T01"),
            ),
        )

        result = run_test_set(definition, env)

        assert list(result.tests) == ["T01", "T02"]
        assert result.passed is False

    def test_unexpected_exception_becomes_failure(self, env):
        """Test an exception escaping a check fails only that test."""
        definition = TRDefinition(
            id="CCC_X_TR01",
            control_id="CCC.X",
            description="desc",
            steps=(
                TestStep("T01", "a", raising),
                TestStep("T02", "b", passing),
            ),
        )

        result = run_test_set(definition, env)

        assert result.tests["T01"].passed is False
        assert result.tests["T01"].message == "Unexpected error: boom"
        assert result.tests["T02"].passed is True


class TestTacticRegistry:
    """Tests for TacticRegistry."""

    def make_definition(self, tr_id: str) -> TRDefinition:
        return TRDefinition(id=tr_id, control_id="CCC.X", description="d")

    def test_register_and_get(self):
        """Test tactics keep their order."""
        first = self.make_definition("TR01")
        second = self.make_definition("TR02")
        registry = TacticRegistry({"red": [second, first]})

        assert registry.get("red") == (second, first)
        assert "red" in registry
        assert len(registry) == 1
        assert registry.names() == ["red"]

    def test_unknown_tactic(self):
        """Test unknown tactic names raise with the available names."""
        registry = TacticRegistry({"red": [], "clear": []})

        with pytest.raises(UnknownTacticError) as exc_info:
            registry.get("blue")

        assert exc_info.value.available == ["clear", "red"]
        assert "blue" in str(exc_info.value)

    def test_duplicate_tactic(self):
        """Test a tactic cannot be registered twice."""
        registry = TacticRegistry({"red": []})

        with pytest.raises(EngineError):
            registry.register("red", [])

    def test_duplicate_requirement(self):
        """Test a tactic cannot list a requirement twice."""
        definition = self.make_definition("TR01")

        with pytest.raises(EngineError):
            TacticRegistry({"red": [definition, definition]})


class TestAssessmentRunner:
    """Tests for AssessmentRunner."""

    def test_run_records_every_requirement(self):
        """Test the report holds one entry per requirement in registry order."""
        env = MagicMock()
        env.invasive = False
        env.target.resource_id.raw = "/subscriptions/x"
        definitions = [
            TRDefinition(
                id="CCC_X_TR02",
                control_id="CCC.X",
                description="d",
                success_message="yes",
                steps=(TestStep("CCC_X_TR02_T01", "a", passing),),
            ),
            TRDefinition(
                id="CCC_X_TR01",
                control_id="CCC.X",
                description="d",
                statement="statement",
            ),
        ]
        runner = AssessmentRunner(env, TacticRegistry({"red": definitions}))

        report = runner.run("red")

        assert list(report.test_sets) == ["CCC_X_TR02", "CCC_X_TR01"]
        assert report.tactic_name == "red"
        assert report.target == "/subscriptions/x"
        assert report.passed_count == 1
        assert report.failed_count == 1
        assert report.passed is False
        assert report.completed_at is not None
        assert report.duration_seconds >= 0

    def test_run_unknown_tactic(self):
        """Test running an unknown tactic raises."""
        runner = AssessmentRunner(MagicMock(), TacticRegistry())

        with pytest.raises(UnknownTacticError):
            runner.run("missing")
