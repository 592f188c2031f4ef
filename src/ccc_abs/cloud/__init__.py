"""
Cloud abstraction layer for the CCC assessment engine.

This package defines the exceptions, records and capability interfaces
the catalog works against. The Azure implementations live in
ccc_abs.cloud.azure and are imported by the bootstrap only.
"""

from ccc_abs.cloud.base import (
    ActivityLogEvent,
    AuthenticationError,
    BlobItem,
    CloudOperationError,
    CloudProviderError,
    ConfigurationError,
    ContainerItem,
    DefenderSetting,
    DiagnosticLogSetting,
    DiagnosticSetting,
    Location,
    LogQueryResult,
    LogTable,
    PolicyAssignment,
    PricingPlan,
    StorageSku,
)
from ccc_abs.cloud.interfaces import CloudClients

__all__ = [
    # Exceptions
    "AuthenticationError",
    "CloudOperationError",
    "CloudProviderError",
    "ConfigurationError",
    # Records
    "ActivityLogEvent",
    "BlobItem",
    "ContainerItem",
    "DefenderSetting",
    "DiagnosticLogSetting",
    "DiagnosticSetting",
    "Location",
    "LogQueryResult",
    "LogTable",
    "PolicyAssignment",
    "PricingPlan",
    "StorageSku",
    # Interfaces
    "CloudClients",
]
