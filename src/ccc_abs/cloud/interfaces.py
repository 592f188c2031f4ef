"""
Capability interfaces over the cloud SDK.

Each Protocol is the narrow slice of an SDK client that the test
catalog and helpers need. Azure implementations live in
ccc_abs.cloud.azure; tests provide fakes.

Response headers captured from management calls are returned as a
mapping with lower-cased keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Protocol

from ccc_abs.cloud.base import (
    ActivityLogEvent,
    BlobItem,
    ContainerItem,
    DefenderSetting,
    DiagnosticSetting,
    Location,
    LogQueryResult,
    PolicyAssignment,
    PricingPlan,
    StorageSku,
)
from ccc_abs.models import AccountProperties, BlobServiceProperties


class AccountsClient(Protocol):
    """Management plane operations on storage accounts."""

    def get_properties(
        self, resource_group: str, account_name: str, expand: str | None = None
    ) -> AccountProperties:
        ...

    def regenerate_key(
        self, resource_group: str, account_name: str, key_name: str
    ) -> dict[str, str]:
        ...

    def create(self, resource_group: str, account_name: str, location: str) -> None:
        ...

    def delete(self, resource_group: str, account_name: str) -> None:
        ...


class BlobServicesClient(Protocol):
    """Reader for blob service properties."""

    def get_service_properties(
        self, resource_group: str, account_name: str
    ) -> BlobServiceProperties:
        ...


class BlobContainersClient(Protocol):
    """Management plane operations on blob containers."""

    def create(self, resource_group: str, account_name: str, container_name: str) -> None:
        ...

    def delete(self, resource_group: str, account_name: str, container_name: str) -> None:
        ...

    def list(
        self, resource_group: str, account_name: str, include_deleted: bool = False
    ) -> Iterable[ContainerItem]:
        ...


class BlockBlobClient(Protocol):
    """Data plane operations on a single blob."""

    def upload(self, content: str) -> None:
        ...

    def delete(self) -> None:
        ...

    def undelete(self) -> None:
        ...


class BlobListingClient(Protocol):
    """Data plane listing of blobs in a container."""

    def list_blobs(
        self, container_name: str, prefix: str, include_versions: bool = False
    ) -> Iterable[BlobItem]:
        ...


class DiagnosticSettingsClient(Protocol):
    """Pager over diagnostic settings of a resource."""

    def list(self, resource_uri: str) -> Iterable[DiagnosticSetting]:
        ...


class LogsQueryClient(Protocol):
    """Log Analytics query client."""

    def query_resource(
        self, resource_id: str, query: str, start: datetime, end: datetime
    ) -> LogQueryResult:
        ...


class ActivityLogsClient(Protocol):
    """Pager over activity log events."""

    def list(self, filter: str) -> Iterable[ActivityLogEvent]:
        ...


class PolicyAssignmentsClient(Protocol):
    """Pager over policy assignments that apply to a resource."""

    def list_for_resource(
        self,
        resource_group: str,
        namespace: str,
        parent_resource_path: str,
        resource_type: str,
        resource_name: str,
    ) -> Iterable[PolicyAssignment]:
        ...


class StorageSkusClient(Protocol):
    """Pager over storage SKUs available to the subscription."""

    def list(self) -> Iterable[StorageSku]:
        ...


class SubscriptionsClient(Protocol):
    """Pager over subscription locations."""

    def list_locations(self, subscription_id: str) -> Iterable[Location]:
        ...


class DefenderClient(Protocol):
    """Defender for Cloud settings."""

    def get_defender_for_storage(self, resource_id: str) -> DefenderSetting:
        ...

    def list_pricings(self) -> Iterable[PricingPlan]:
        ...


class RecoveryVaultsClient(Protocol):
    """Recovery Services vault management."""

    def create(self, resource_group: str, vault_name: str, location: str) -> None:
        ...

    def delete(self, resource_group: str, vault_name: str) -> None:
        ...


class RoleAssignmentsClient(Protocol):
    """Role assignment management."""

    def create(
        self,
        scope: str,
        assignment_name: str,
        role_definition_id: str,
        principal_id: str,
    ) -> dict[str, str]:
        ...

    def delete(self, scope: str, assignment_name: str) -> None:
        ...


BlockBlobClientFactory = Callable[[str], BlockBlobClient]
BlobListingClientFactory = Callable[[str], BlobListingClient]


@dataclass
class CloudClients:
    """One implementation of every capability interface."""

    accounts: AccountsClient
    blob_services: BlobServicesClient
    blob_containers: BlobContainersClient
    block_blob_factory: BlockBlobClientFactory
    blob_listing_factory: BlobListingClientFactory
    diagnostic_settings: DiagnosticSettingsClient
    logs: LogsQueryClient
    activity_logs: ActivityLogsClient
    policy_assignments: PolicyAssignmentsClient
    storage_skus: StorageSkusClient
    subscriptions: SubscriptionsClient
    defender: DefenderClient
    role_assignments: RoleAssignmentsClient
    recovery_vaults: RecoveryVaultsClient
