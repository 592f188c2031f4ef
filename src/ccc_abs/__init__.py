"""
CCC ABS - Common Cloud Controls assessment engine for Azure Blob Storage

Runs the test requirements of the Common Cloud Controls catalog against
one Azure Storage Account and reports a pass/fail verdict, with a
message and optional evidence, for every test.

Quick Start:
    >>> from ccc_abs.bootstrap import bootstrap
    >>> from ccc_abs.catalog.tactics import build_registry
    >>> from ccc_abs.config import AssessmentConfig
    >>> from ccc_abs.engine import AssessmentRunner
    >>>
    >>> config = AssessmentConfig(
    ...     storage_account_resource_id="/subscriptions/.../storageAccounts/acct",
    ...     allowed_regions=["westeurope", "northeurope"],
    ... )
    >>> runner = AssessmentRunner(bootstrap(config), build_registry())
    >>> report = runner.run("tlp_red")
    >>> print(f"{report.passed_count} passed, {report.failed_count} failed")
"""

from __future__ import annotations

__version__ = "0.1.0"

from ccc_abs.config import AssessmentConfig, LogPollingSettings
from ccc_abs.engine import AssessmentRunner, TacticRegistry, TRDefinition, TestStep
from ccc_abs.models import RunReport, TestResult, TestSetResult

__all__ = [
    "__version__",
    "AssessmentConfig",
    "LogPollingSettings",
    "AssessmentRunner",
    "TacticRegistry",
    "TRDefinition",
    "TestStep",
    "RunReport",
    "TestResult",
    "TestSetResult",
]
