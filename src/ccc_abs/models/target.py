"""
Target account data models for the CCC assessment engine.

A TargetSnapshot is the one-shot view of the audited storage account,
taken when the engine initializes. Tests only ever read it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

RESOURCE_ID_PATTERN = re.compile(
    r"^/subscriptions/(?P<sub>[0-9a-fA-F-]+)"
    r"/resourceGroups/(?P<rg>[a-zA-Z0-9-_()]+)"
    r"/providers/Microsoft\.Storage/storageAccounts/(?P<acct>[a-z0-9]+)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ResourceId:
    """Parsed storage account resource id."""

    subscription_id: str
    resource_group: str
    account_name: str
    raw: str

    @classmethod
    def parse(cls, resource_id: str) -> ResourceId:
        """
        Parse a storage account resource id.

        Args:
            resource_id: Full ARM resource id of the storage account

        Returns:
            Parsed ResourceId

        Raises:
            ValueError: If the id does not match the storage account format
        """
        match = RESOURCE_ID_PATTERN.match(resource_id)
        if match is None:
            raise ValueError(f"Failed to parse storage account resource ID: {resource_id}")
        return cls(
            subscription_id=match.group("sub"),
            resource_group=match.group("rg"),
            account_name=match.group("acct"),
            raw=resource_id,
        )

    @property
    def blob_service_id(self) -> str:
        """Resource id of the default blob service."""
        return f"{self.raw}/blobServices/default"

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class ImmutabilitySettings:
    """Account level immutable storage with versioning."""

    enabled: bool = False
    policy_state: str | None = None
    period_days: int | None = None


@dataclass(frozen=True)
class AccountProperties:
    """
    Storage account properties relevant to the control catalog.

    Optional fields are None when the service did not report them.
    """

    name: str
    location: str = ""
    sku_name: str = ""
    primary_blob_endpoint: str = ""
    blob_encryption_enabled: bool = False
    key_source: str | None = None
    key_vault_uri: str | None = None
    allow_blob_public_access: bool | None = None
    allow_shared_key_access: bool | None = None
    public_network_access: str | None = None
    network_default_action: str | None = None
    ip_rules: tuple[str, ...] = field(default_factory=tuple)
    status_of_secondary: str | None = None
    last_sync_time: datetime | None = None
    immutability: ImmutabilitySettings | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "location": self.location,
            "sku_name": self.sku_name,
            "primary_blob_endpoint": self.primary_blob_endpoint,
            "blob_encryption_enabled": self.blob_encryption_enabled,
            "key_source": self.key_source,
            "key_vault_uri": self.key_vault_uri,
            "allow_blob_public_access": self.allow_blob_public_access,
            "allow_shared_key_access": self.allow_shared_key_access,
            "public_network_access": self.public_network_access,
            "network_default_action": self.network_default_action,
            "ip_rules": list(self.ip_rules),
            "status_of_secondary": self.status_of_secondary,
            "last_sync_time": (
                self.last_sync_time.isoformat() if self.last_sync_time else None
            ),
            "immutability": (
                {
                    "enabled": self.immutability.enabled,
                    "policy_state": self.immutability.policy_state,
                    "period_days": self.immutability.period_days,
                }
                if self.immutability
                else None
            ),
        }


@dataclass(frozen=True)
class DeleteRetention:
    """Soft delete retention policy for blobs or containers."""

    enabled: bool = False
    days: int | None = None
    allow_permanent_delete: bool = False


@dataclass(frozen=True)
class BlobServiceProperties:
    """Blob service properties of the storage account."""

    versioning_enabled: bool | None = None
    delete_retention: DeleteRetention = field(default_factory=DeleteRetention)
    container_delete_retention: DeleteRetention = field(default_factory=DeleteRetention)


@dataclass(frozen=True)
class TargetSnapshot:
    """
    Cached, read-only view of the target storage account.

    Attributes:
        resource_id: Parsed resource id
        account: Account properties
        blob_service: Blob service properties
        timestamp: When the account properties were fetched
    """

    resource_id: ResourceId
    account: AccountProperties
    blob_service: BlobServiceProperties
    timestamp: datetime

    @property
    def primary_uri(self) -> str:
        """Primary blob endpoint of the account."""
        return self.account.primary_blob_endpoint
