"""
Evidence values attached to test results.

Each evidence kind is a small frozen dataclass. On the wire every kind
is written as a discriminated mapping ``{"kind": <kind>, ...fields}`` so
reports can be parsed back into the same variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union


@dataclass(frozen=True)
class RetentionPolicy:
    """Retention period configured on a soft delete or immutability policy."""

    name: str
    days: int

    kind = "retention_policy"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "days": self.days}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RetentionPolicy:
        return cls(name=data["name"], days=int(data["days"]))


@dataclass(frozen=True)
class SKU:
    """Storage account SKU name."""

    sku_name: str

    kind = "sku"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "sku_name": self.sku_name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SKU:
        return cls(sku_name=data["sku_name"])


@dataclass(frozen=True)
class LastSyncTime:
    """Last geo-replication sync time reported by the account."""

    name: str
    value: datetime

    kind = "last_sync_time"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "value": self.value.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LastSyncTime:
        value = data["value"]
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        return cls(name=data["name"], value=value)


@dataclass(frozen=True)
class ImmutabilityPolicyState:
    """State of the account level immutability policy."""

    name: str
    state: str

    kind = "immutability_policy_state"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "state": self.state}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImmutabilityPolicyState:
        return cls(name=data["name"], state=data["state"])


@dataclass(frozen=True)
class AllowedIps:
    """IP addresses and ranges on the account network allowlist."""

    name: str
    ips: tuple[str, ...] = field(default_factory=tuple)

    kind = "allowed_ips"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "ips": list(self.ips)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AllowedIps:
        return cls(name=data["name"], ips=tuple(data.get("ips", [])))


@dataclass(frozen=True)
class KeyRotationPolicy:
    """Maximum key rotation interval required by an assigned policy."""

    name: str
    days: int

    kind = "key_rotation_policy"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "days": self.days}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeyRotationPolicy:
        return cls(name=data["name"], days=int(data["days"]))


@dataclass(frozen=True)
class LogAnalyticsWorkspace:
    """Log Analytics workspace receiving the account diagnostic logs."""

    name: str
    value: str

    kind = "log_analytics_workspace"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogAnalyticsWorkspace:
        return cls(name=data["name"], value=data["value"])


Evidence = Union[
    RetentionPolicy,
    SKU,
    LastSyncTime,
    ImmutabilityPolicyState,
    AllowedIps,
    KeyRotationPolicy,
    LogAnalyticsWorkspace,
]

EVIDENCE_KINDS: dict[str, type] = {
    cls.kind: cls
    for cls in (
        RetentionPolicy,
        SKU,
        LastSyncTime,
        ImmutabilityPolicyState,
        AllowedIps,
        KeyRotationPolicy,
        LogAnalyticsWorkspace,
    )
}


def evidence_from_dict(data: dict[str, Any] | None) -> Evidence | None:
    """
    Parse a serialized evidence mapping back into its variant.

    Args:
        data: Mapping produced by an evidence ``to_dict`` call, or None

    Returns:
        Evidence instance, or None when no evidence was recorded

    Raises:
        ValueError: If the mapping names an unknown kind
    """
    if data is None:
        return None
    kind = data.get("kind")
    evidence_cls = EVIDENCE_KINDS.get(kind or "")
    if evidence_cls is None:
        raise ValueError(f"Unknown evidence kind: {kind}")
    return evidence_cls.from_dict(data)
