"""
Assessment runner.

Runs the test requirements of one tactic, in registry order, and
collects their results into a RunReport.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ccc_abs.engine.definitions import run_test_set
from ccc_abs.engine.registry import TacticRegistry
from ccc_abs.models import RunReport
from ccc_abs.observability.logging import get_logger

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

logger = get_logger("engine.runner")


class AssessmentRunner:
    """
    Runs tactics against the target of an environment.

    Test requirements run one at a time; there is no parallelism and no
    background work.
    """

    def __init__(self, env: Environment, registry: TacticRegistry):
        """
        Initialize the runner.

        Args:
            env: Environment carrying the target and collaborators
            registry: Registered tactics
        """
        self.env = env
        self.registry = registry

    def run(self, tactic_name: str) -> RunReport:
        """
        Run one tactic.

        Args:
            tactic_name: Name of a registered tactic

        Returns:
            RunReport with one entry per test requirement

        Raises:
            UnknownTacticError: If the tactic is not registered
        """
        definitions = self.registry.get(tactic_name)
        target = self.env.target.resource_id.raw

        report = RunReport(tactic_name=tactic_name, target=target)
        logger.run_started(tactic_name, target, len(definitions))

        for definition in definitions:
            result = run_test_set(definition, self.env)
            report.record(definition.id, result)
            logger.test_set_completed(definition.id, result.passed, result.message)

        report.completed_at = datetime.now(timezone.utc)
        logger.run_completed(
            tactic_name,
            report.passed_count,
            report.failed_count,
            report.duration_seconds,
        )
        return report
