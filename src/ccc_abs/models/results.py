"""
Result data models for the CCC assessment engine.

Defines the outcome of a single Test (TestResult), of a Test
Requirement (TestSetResult) and of a whole tactic run (RunReport).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ccc_abs.models.evidence import Evidence, evidence_from_dict

NOT_STARTED_MESSAGE = "TestSet has not yet started."


@dataclass
class TestResult:
    """
    Outcome of one Test.

    Attributes:
        description: Why the test exists
        function: Stable symbolic id of the test (e.g. CCC_C01_TR01_T01)
        passed: Whether the test passed
        message: Human readable explanation, deterministic per branch
        value: Optional structured evidence
    """

    __test__ = False

    description: str
    function: str
    passed: bool = False
    message: str = ""
    value: Evidence | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "description": self.description,
            "function": self.function,
            "passed": self.passed,
            "message": self.message,
            "value": self.value.to_dict() if self.value is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestResult:
        """Create from dictionary."""
        return cls(
            description=data.get("description", ""),
            function=data["function"],
            passed=data.get("passed", False),
            message=data.get("message", ""),
            value=evidence_from_dict(data.get("value")),
        )


@dataclass
class TestSetResult:
    """
    Outcome of one Test Requirement.

    The ``tests`` mapping keeps insertion order, which is the order the
    tests were executed in.
    """

    __test__ = False

    control_id: str
    description: str
    docs_url: str
    passed: bool = False
    message: str = NOT_STARTED_MESSAGE
    tests: dict[str, TestResult] = field(default_factory=dict)
    provisional: bool = False

    @property
    def test_count(self) -> int:
        """Get number of executed tests."""
        return len(self.tests)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "control_id": self.control_id,
            "description": self.description,
            "docs_url": self.docs_url,
            "passed": self.passed,
            "message": self.message,
            "provisional": self.provisional,
            "tests": {name: result.to_dict() for name, result in self.tests.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestSetResult:
        """Create from dictionary."""
        return cls(
            control_id=data["control_id"],
            description=data.get("description", ""),
            docs_url=data.get("docs_url", ""),
            passed=data.get("passed", False),
            message=data.get("message", NOT_STARTED_MESSAGE),
            tests={
                name: TestResult.from_dict(result)
                for name, result in data.get("tests", {}).items()
            },
            provisional=data.get("provisional", False),
        )


@dataclass
class RunReport:
    """
    Outcome of running one tactic against the target account.

    Attributes:
        tactic_name: Name of the executed tactic
        target: Storage account resource id the run was made against
        test_sets: Mapping of TR id to its result, in registry order
        started_at: When the run started
        completed_at: When the run finished
    """

    tactic_name: str
    target: str = ""
    test_sets: dict[str, TestSetResult] = field(default_factory=dict)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    @property
    def passed_count(self) -> int:
        """Get number of passing test sets."""
        return sum(1 for r in self.test_sets.values() if r.passed)

    @property
    def failed_count(self) -> int:
        """Get number of failing test sets."""
        return sum(1 for r in self.test_sets.values() if not r.passed)

    @property
    def passed(self) -> bool:
        """Check if every test set passed."""
        return self.failed_count == 0

    @property
    def duration_seconds(self) -> float:
        """Get run duration, zero while the run is in progress."""
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def record(self, test_set_id: str, result: TestSetResult) -> None:
        """Record a finished test set. Each id is written once."""
        if test_set_id in self.test_sets:
            raise ValueError(f"Test set already recorded: {test_set_id}")
        self.test_sets[test_set_id] = result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "tactic_name": self.tactic_name,
            "target": self.target,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "summary": {
                "total": len(self.test_sets),
                "passed": self.passed_count,
                "failed": self.failed_count,
            },
            "test_sets": {
                name: result.to_dict() for name, result in self.test_sets.items()
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunReport:
        """Create from dictionary."""
        completed_at = data.get("completed_at")
        return cls(
            tactic_name=data["tactic_name"],
            target=data.get("target", ""),
            test_sets={
                name: TestSetResult.from_dict(result)
                for name, result in data.get("test_sets", {}).items()
            },
            started_at=datetime.fromisoformat(data["started_at"])
            if "started_at" in data
            else datetime.now(timezone.utc),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
        )

    @classmethod
    def from_json(cls, json_str: str) -> RunReport:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))
