"""
Base types for the cloud abstraction layer.

This module defines the exceptions raised by cloud adapters and the
plain records they return, so that the test catalog never handles SDK
objects directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# Exceptions


class CloudProviderError(Exception):
    """Base exception for cloud provider errors."""

    pass


class AuthenticationError(CloudProviderError):
    """Raised when credentials or tokens cannot be obtained."""

    pass


class ConfigurationError(CloudProviderError):
    """Raised when configuration is invalid."""

    pass


class CloudOperationError(CloudProviderError):
    """
    Raised when a cloud API call fails.

    Attributes:
        error_code: Service error code when the service returned one
    """

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


# Records


@dataclass(frozen=True)
class DiagnosticLogSetting:
    """One log entry of a diagnostic setting."""

    enabled: bool
    category: str | None = None
    category_group: str | None = None


@dataclass(frozen=True)
class DiagnosticSetting:
    """Diagnostic setting attached to a resource."""

    name: str
    type: str
    workspace_id: str | None = None
    logs: tuple[DiagnosticLogSetting, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LogTable:
    """Table returned by a Log Analytics query."""

    columns: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...]


@dataclass(frozen=True)
class LogQueryResult:
    """Result of a Log Analytics query, with any embedded error code."""

    tables: tuple[LogTable, ...] = field(default_factory=tuple)
    error_code: str | None = None


@dataclass(frozen=True)
class ActivityLogEvent:
    """Activity log event."""

    operation_name: str
    resource_id: str


@dataclass(frozen=True)
class PolicyAssignment:
    """Policy assignment with its parameter values flattened."""

    name: str
    policy_definition_id: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StorageSku:
    """Storage SKU and the regions that offer it."""

    name: str
    locations: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Location:
    """Subscription location and its paired regions."""

    name: str
    paired_regions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ContainerItem:
    """Blob container as listed through the management plane."""

    name: str
    deleted: bool = False


@dataclass(frozen=True)
class BlobItem:
    """Blob or blob version as listed through the data plane."""

    name: str
    version_id: str | None = None


@dataclass(frozen=True)
class DefenderSetting:
    """Defender for Storage setting of one account."""

    is_enabled: bool


@dataclass(frozen=True)
class PricingPlan:
    """Defender for Cloud pricing plan of the subscription."""

    name: str
    pricing_tier: str
