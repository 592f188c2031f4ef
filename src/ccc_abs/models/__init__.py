"""
Data models for the CCC assessment engine.

This package contains the result models produced by a run, the
evidence variants attached to test results, and the target snapshot.
"""

from ccc_abs.models.evidence import (
    AllowedIps,
    Evidence,
    ImmutabilityPolicyState,
    KeyRotationPolicy,
    LastSyncTime,
    LogAnalyticsWorkspace,
    RetentionPolicy,
    SKU,
    evidence_from_dict,
)
from ccc_abs.models.results import (
    NOT_STARTED_MESSAGE,
    RunReport,
    TestResult,
    TestSetResult,
)
from ccc_abs.models.target import (
    AccountProperties,
    BlobServiceProperties,
    DeleteRetention,
    ImmutabilitySettings,
    ResourceId,
    TargetSnapshot,
)

__all__ = [
    # Evidence
    "AllowedIps",
    "Evidence",
    "ImmutabilityPolicyState",
    "KeyRotationPolicy",
    "LastSyncTime",
    "LogAnalyticsWorkspace",
    "RetentionPolicy",
    "SKU",
    "evidence_from_dict",
    # Results
    "NOT_STARTED_MESSAGE",
    "RunReport",
    "TestResult",
    "TestSetResult",
    # Target
    "AccountProperties",
    "BlobServiceProperties",
    "DeleteRetention",
    "ImmutabilitySettings",
    "ResourceId",
    "TargetSnapshot",
]
