"""
Azure SDK implementations of the capability interfaces.

Each adapter lazily creates its SDK client on first use, converts SDK
models into the records defined in ccc_abs.cloud.base and
ccc_abs.models, and translates Azure errors into CloudOperationError.
Pagers are drained inside the adapter, so paging failures surface from
the call itself.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from azure.core.exceptions import AzureError
from azure.mgmt.authorization import AuthorizationManagementClient
from azure.mgmt.authorization.models import RoleAssignmentCreateParameters
from azure.mgmt.monitor import MonitorManagementClient
from azure.mgmt.recoveryservices import RecoveryServicesClient
from azure.mgmt.recoveryservices.models import Sku as VaultSku
from azure.mgmt.recoveryservices.models import Vault, VaultProperties
from azure.mgmt.resource import PolicyClient, SubscriptionClient
from azure.mgmt.security import SecurityCenter
from azure.mgmt.storage import StorageManagementClient
from azure.mgmt.storage.models import (
    BlobContainer,
    Sku,
    StorageAccountCreateParameters,
    StorageAccountRegenerateKeyParameters,
)
from azure.monitor.query import LogsQueryClient, LogsQueryStatus
from azure.storage.blob import BlobClient, BlobServiceClient

from ccc_abs.cloud.base import (
    ActivityLogEvent,
    BlobItem,
    CloudOperationError,
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
from ccc_abs.models import (
    AccountProperties,
    BlobServiceProperties,
    DeleteRetention,
    ImmutabilitySettings,
)

logger = logging.getLogger(__name__)

TEST_ACCOUNT_SKU = "Standard_LRS"
TEST_ACCOUNT_KIND = "StorageV2"
TEST_VAULT_SKU = "Standard"


def _error_code(error: Exception) -> str | None:
    """Service error code carried by an Azure exception, if any."""
    code = getattr(error, "error_code", None)
    if not code:
        code = getattr(getattr(error, "error", None), "code", None)
    return str(code) if code else None


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except AzureError as e:
        logger.debug(f"{action} failed: {e}")
        raise CloudOperationError(str(e), error_code=_error_code(e)) from e


def _value(obj: Any) -> Any:
    """Plain value of an SDK enum member, or the object itself."""
    return getattr(obj, "value", obj)


def _items(response: Any) -> list[Any]:
    """Items of a pager, or of a collection model exposing ``value``."""
    if response is None:
        return []
    value = getattr(response, "value", None)
    if isinstance(value, list):
        return value
    return list(response)


def _capture_headers(headers: dict[str, str]):
    """Build a raw_response_hook storing response headers into a dict."""

    def hook(pipeline_response: Any) -> None:
        http_response = pipeline_response.http_response
        for name, value in http_response.headers.items():
            headers[name.lower()] = value

    return hook


def account_properties_from_sdk(account: Any) -> AccountProperties:
    """
    Convert an SDK StorageAccount into AccountProperties.

    Args:
        account: azure.mgmt.storage.models.StorageAccount

    Returns:
        AccountProperties
    """
    encryption = account.encryption
    blob_encryption_enabled = False
    key_source = None
    key_vault_uri = None
    if encryption is not None:
        services = encryption.services
        blob = services.blob if services is not None else None
        blob_encryption_enabled = bool(blob is not None and blob.enabled)
        key_source = _value(encryption.key_source) if encryption.key_source else None
        if encryption.key_vault_properties is not None:
            key_vault_uri = encryption.key_vault_properties.key_vault_uri

    network_rules = account.network_rule_set
    default_action = None
    ip_rules: tuple[str, ...] = ()
    if network_rules is not None:
        if network_rules.default_action is not None:
            default_action = _value(network_rules.default_action)
        ip_rules = tuple(rule.ip_address_or_range for rule in network_rules.ip_rules or [])

    last_sync_time = None
    if account.geo_replication_stats is not None:
        last_sync_time = account.geo_replication_stats.last_sync_time

    immutability = None
    immutable_storage = account.immutable_storage_with_versioning
    if immutable_storage is not None:
        policy = immutable_storage.immutability_policy
        immutability = ImmutabilitySettings(
            enabled=bool(immutable_storage.enabled),
            policy_state=_value(policy.state) if policy is not None and policy.state else None,
            period_days=(
                policy.immutability_period_since_creation_in_days
                if policy is not None
                else None
            ),
        )

    endpoints = account.primary_endpoints
    return AccountProperties(
        name=account.name or "",
        location=account.location or "",
        sku_name=_value(account.sku.name) if account.sku is not None else "",
        primary_blob_endpoint=(endpoints.blob or "") if endpoints is not None else "",
        blob_encryption_enabled=blob_encryption_enabled,
        key_source=key_source,
        key_vault_uri=key_vault_uri,
        allow_blob_public_access=account.allow_blob_public_access,
        allow_shared_key_access=account.allow_shared_key_access,
        public_network_access=(
            _value(account.public_network_access) if account.public_network_access else None
        ),
        network_default_action=default_action,
        ip_rules=ip_rules,
        status_of_secondary=(
            _value(account.status_of_secondary) if account.status_of_secondary else None
        ),
        last_sync_time=last_sync_time,
        immutability=immutability,
    )


def _delete_retention(policy: Any) -> DeleteRetention:
    if policy is None:
        return DeleteRetention()
    return DeleteRetention(
        enabled=bool(policy.enabled),
        days=policy.days,
        allow_permanent_delete=bool(getattr(policy, "allow_permanent_delete", False)),
    )


def blob_service_properties_from_sdk(properties: Any) -> BlobServiceProperties:
    """Convert SDK BlobServiceProperties into the model of the same name."""
    return BlobServiceProperties(
        versioning_enabled=properties.is_versioning_enabled,
        delete_retention=_delete_retention(properties.delete_retention_policy),
        container_delete_retention=_delete_retention(
            properties.container_delete_retention_policy
        ),
    )


class _ManagementAdapter:
    """Holds a credential and subscription and lazily builds one SDK client."""

    def __init__(self, credential: Any, subscription_id: str):
        self._credential = credential
        self._subscription_id = subscription_id
        self._client: Any = None

    def _create_client(self) -> Any:
        raise NotImplementedError

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = self._create_client()
        return self._client


class _StorageAdapter(_ManagementAdapter):
    def _create_client(self) -> StorageManagementClient:
        return StorageManagementClient(
            credential=self._credential,
            subscription_id=self._subscription_id,
        )


class AzureAccountsClient(_StorageAdapter):
    """Storage account operations through StorageManagementClient."""

    def get_properties(
        self, resource_group: str, account_name: str, expand: str | None = None
    ) -> AccountProperties:
        client = self._get_client()
        with _translate_errors("Get storage account properties"):
            if expand:
                account = client.storage_accounts.get_properties(
                    resource_group, account_name, expand=expand
                )
            else:
                account = client.storage_accounts.get_properties(resource_group, account_name)
        return account_properties_from_sdk(account)

    def regenerate_key(
        self, resource_group: str, account_name: str, key_name: str
    ) -> dict[str, str]:
        client = self._get_client()
        headers: dict[str, str] = {}
        with _translate_errors("Regenerate storage account key"):
            client.storage_accounts.regenerate_key(
                resource_group,
                account_name,
                StorageAccountRegenerateKeyParameters(key_name=key_name),
                raw_response_hook=_capture_headers(headers),
            )
        return headers

    def create(self, resource_group: str, account_name: str, location: str) -> None:
        client = self._get_client()
        parameters = StorageAccountCreateParameters(
            sku=Sku(name=TEST_ACCOUNT_SKU),
            kind=TEST_ACCOUNT_KIND,
            location=location,
        )
        with _translate_errors("Create storage account"):
            client.storage_accounts.begin_create(
                resource_group, account_name, parameters
            ).result()

    def delete(self, resource_group: str, account_name: str) -> None:
        client = self._get_client()
        with _translate_errors("Delete storage account"):
            client.storage_accounts.delete(resource_group, account_name)


class AzureBlobServicesClient(_StorageAdapter):
    """Blob service properties through StorageManagementClient."""

    def get_service_properties(
        self, resource_group: str, account_name: str
    ) -> BlobServiceProperties:
        client = self._get_client()
        with _translate_errors("Get blob service properties"):
            properties = client.blob_services.get_service_properties(
                resource_group, account_name
            )
        return blob_service_properties_from_sdk(properties)


class AzureBlobContainersClient(_StorageAdapter):
    """Blob container operations through StorageManagementClient."""

    def create(self, resource_group: str, account_name: str, container_name: str) -> None:
        client = self._get_client()
        with _translate_errors("Create blob container"):
            client.blob_containers.create(
                resource_group, account_name, container_name, BlobContainer()
            )

    def delete(self, resource_group: str, account_name: str, container_name: str) -> None:
        client = self._get_client()
        with _translate_errors("Delete blob container"):
            client.blob_containers.delete(resource_group, account_name, container_name)

    def list(
        self, resource_group: str, account_name: str, include_deleted: bool = False
    ) -> list[ContainerItem]:
        client = self._get_client()
        with _translate_errors("List blob containers"):
            if include_deleted:
                pager = client.blob_containers.list(
                    resource_group, account_name, include="deleted"
                )
            else:
                pager = client.blob_containers.list(resource_group, account_name)
            return [
                ContainerItem(name=item.name or "", deleted=bool(item.deleted))
                for item in pager
            ]


class AzureStorageSkusClient(_StorageAdapter):
    """Storage SKU listing through StorageManagementClient."""

    def list(self) -> list[StorageSku]:
        client = self._get_client()
        with _translate_errors("List storage SKUs"):
            return [
                StorageSku(name=_value(sku.name), locations=tuple(sku.locations or []))
                for sku in client.skus.list()
            ]


class AzureBlockBlobClient:
    """Data plane operations on one blob, authenticated with the credential."""

    def __init__(self, blob_url: str, credential: Any):
        self._client = BlobClient.from_blob_url(blob_url, credential=credential)

    def upload(self, content: str) -> None:
        with _translate_errors("Upload blob"):
            self._client.upload_blob(content, overwrite=True)

    def delete(self) -> None:
        with _translate_errors("Delete blob"):
            self._client.delete_blob()

    def undelete(self) -> None:
        with _translate_errors("Undelete blob"):
            self._client.undelete_blob()


class AzureBlobListingClient:
    """Data plane blob listing for one account."""

    def __init__(self, account_url: str, credential: Any):
        self._client = BlobServiceClient(account_url, credential=credential)

    def list_blobs(
        self, container_name: str, prefix: str, include_versions: bool = False
    ) -> list[BlobItem]:
        container = self._client.get_container_client(container_name)
        include = ["versions"] if include_versions else None
        with _translate_errors("List blobs"):
            return [
                BlobItem(name=blob.name, version_id=getattr(blob, "version_id", None))
                for blob in container.list_blobs(name_starts_with=prefix, include=include)
            ]


class _MonitorAdapter(_ManagementAdapter):
    def _create_client(self) -> MonitorManagementClient:
        return MonitorManagementClient(
            credential=self._credential,
            subscription_id=self._subscription_id,
        )


class AzureDiagnosticSettingsClient(_MonitorAdapter):
    """Diagnostic settings through MonitorManagementClient."""

    def list(self, resource_uri: str) -> list[DiagnosticSetting]:
        client = self._get_client()
        with _translate_errors("List diagnostic settings"):
            response = client.diagnostic_settings.list(resource_uri)
            settings = _items(response)

        return [
            DiagnosticSetting(
                name=setting.name or "",
                type=setting.type or "",
                workspace_id=setting.workspace_id,
                logs=tuple(
                    DiagnosticLogSetting(
                        enabled=bool(log.enabled),
                        category=log.category,
                        category_group=getattr(log, "category_group", None),
                    )
                    for log in setting.logs or []
                ),
            )
            for setting in settings
        ]


class AzureActivityLogsClient(_MonitorAdapter):
    """Activity log events through MonitorManagementClient."""

    def list(self, filter: str) -> list[ActivityLogEvent]:
        client = self._get_client()
        events = []
        with _translate_errors("List activity logs"):
            for event in client.activity_logs.list(filter=filter):
                operation = event.operation_name
                events.append(
                    ActivityLogEvent(
                        operation_name=(
                            operation.localized_value or operation.value or ""
                        )
                        if operation is not None
                        else "",
                        resource_id=event.resource_id or "",
                    )
                )
        return events


class AzureLogsQueryClient:
    """Log Analytics queries scoped to a resource."""

    def __init__(self, credential: Any):
        self._credential = credential
        self._client: LogsQueryClient | None = None

    def _get_client(self) -> LogsQueryClient:
        if self._client is None:
            self._client = LogsQueryClient(self._credential)
        return self._client

    def query_resource(self, resource_id, query, start, end) -> LogQueryResult:
        client = self._get_client()
        with _translate_errors("Query logs"):
            response = client.query_resource(resource_id, query, timespan=(start, end))

        error_code = None
        if response.status == LogsQueryStatus.PARTIAL:
            error_code = getattr(response.partial_error, "code", None)
            tables = response.partial_data or []
        else:
            tables = response.tables or []

        return LogQueryResult(
            tables=tuple(
                LogTable(
                    columns=tuple(str(column) for column in table.columns),
                    rows=tuple(tuple(row) for row in table.rows),
                )
                for table in tables
            ),
            error_code=error_code,
        )


class AzurePolicyAssignmentsClient(_ManagementAdapter):
    """Policy assignments through PolicyClient."""

    def _create_client(self) -> PolicyClient:
        return PolicyClient(
            credential=self._credential,
            subscription_id=self._subscription_id,
        )

    def list_for_resource(
        self,
        resource_group: str,
        namespace: str,
        parent_resource_path: str,
        resource_type: str,
        resource_name: str,
    ) -> list[PolicyAssignment]:
        client = self._get_client()
        with _translate_errors("List policy assignments"):
            assignments = list(
                client.policy_assignments.list_for_resource(
                    resource_group,
                    namespace,
                    parent_resource_path,
                    resource_type,
                    resource_name,
                )
            )

        return [
            PolicyAssignment(
                name=assignment.name or "",
                policy_definition_id=assignment.policy_definition_id or "",
                parameters={
                    key: getattr(parameter, "value", None)
                    for key, parameter in (assignment.parameters or {}).items()
                },
            )
            for assignment in assignments
        ]


class AzureSubscriptionsClient:
    """Subscription locations through SubscriptionClient."""

    def __init__(self, credential: Any):
        self._credential = credential
        self._client: SubscriptionClient | None = None

    def _get_client(self) -> SubscriptionClient:
        if self._client is None:
            self._client = SubscriptionClient(credential=self._credential)
        return self._client

    def list_locations(self, subscription_id: str) -> list[Location]:
        client = self._get_client()
        locations = []
        with _translate_errors("List subscription locations"):
            for location in client.subscriptions.list_locations(subscription_id):
                metadata = location.metadata
                paired = metadata.paired_region if metadata is not None else None
                locations.append(
                    Location(
                        name=location.name or "",
                        paired_regions=tuple(region.name for region in paired or []),
                    )
                )
        return locations


class AzureDefenderClient(_ManagementAdapter):
    """Defender for Cloud settings through SecurityCenter."""

    def _create_client(self) -> SecurityCenter:
        return SecurityCenter(
            credential=self._credential,
            subscription_id=self._subscription_id,
        )

    def get_defender_for_storage(self, resource_id: str) -> DefenderSetting:
        client = self._get_client()
        with _translate_errors("Get Defender for Storage setting"):
            setting = client.defender_for_storage.get(resource_id, "current")

        is_enabled = getattr(setting, "is_enabled", None)
        if is_enabled is None:
            properties = getattr(setting, "properties", None)
            is_enabled = getattr(properties, "is_enabled", False)
        return DefenderSetting(is_enabled=bool(is_enabled))

    def list_pricings(self) -> list[PricingPlan]:
        client = self._get_client()
        with _translate_errors("List Defender pricings"):
            response = client.pricings.list(f"subscriptions/{self._subscription_id}")
            pricings = _items(response)

        return [
            PricingPlan(name=pricing.name or "", pricing_tier=_value(pricing.pricing_tier) or "")
            for pricing in pricings
        ]


class AzureRoleAssignmentsClient(_ManagementAdapter):
    """Role assignments through AuthorizationManagementClient."""

    def _create_client(self) -> AuthorizationManagementClient:
        return AuthorizationManagementClient(
            credential=self._credential,
            subscription_id=self._subscription_id,
        )

    def create(
        self,
        scope: str,
        assignment_name: str,
        role_definition_id: str,
        principal_id: str,
    ) -> dict[str, str]:
        client = self._get_client()
        headers: dict[str, str] = {}
        parameters = RoleAssignmentCreateParameters(
            role_definition_id=role_definition_id,
            principal_id=principal_id,
        )
        with _translate_errors("Create role assignment"):
            client.role_assignments.create(
                scope,
                assignment_name,
                parameters,
                raw_response_hook=_capture_headers(headers),
            )
        return headers

    def delete(self, scope: str, assignment_name: str) -> None:
        client = self._get_client()
        with _translate_errors("Delete role assignment"):
            client.role_assignments.delete(scope, assignment_name)


class AzureRecoveryVaultsClient(_ManagementAdapter):
    """Recovery Services vaults through RecoveryServicesClient."""

    def _create_client(self) -> RecoveryServicesClient:
        return RecoveryServicesClient(
            credential=self._credential,
            subscription_id=self._subscription_id,
        )

    def create(self, resource_group: str, vault_name: str, location: str) -> None:
        client = self._get_client()
        vault = Vault(
            location=location,
            sku=VaultSku(name=TEST_VAULT_SKU),
            properties=VaultProperties(public_network_access="Disabled"),
        )
        # Policy denials are returned by the initial request, the poller is not awaited
        with _translate_errors("Create Recovery Services vault"):
            client.vaults.begin_create_or_update(resource_group, vault_name, vault)

    def delete(self, resource_group: str, vault_name: str) -> None:
        client = self._get_client()
        with _translate_errors("Delete Recovery Services vault"):
            client.vaults.delete(resource_group, vault_name)


def build_azure_clients(credential: Any, subscription_id: str) -> CloudClients:
    """
    Build the Azure implementation of every capability interface.

    Args:
        credential: Azure credential, typically DefaultAzureCredential
        subscription_id: Subscription of the target storage account

    Returns:
        CloudClients bundle
    """
    return CloudClients(
        accounts=AzureAccountsClient(credential, subscription_id),
        blob_services=AzureBlobServicesClient(credential, subscription_id),
        blob_containers=AzureBlobContainersClient(credential, subscription_id),
        block_blob_factory=lambda url: AzureBlockBlobClient(url, credential),
        blob_listing_factory=lambda url: AzureBlobListingClient(url, credential),
        diagnostic_settings=AzureDiagnosticSettingsClient(credential, subscription_id),
        logs=AzureLogsQueryClient(credential),
        activity_logs=AzureActivityLogsClient(credential, subscription_id),
        policy_assignments=AzurePolicyAssignmentsClient(credential, subscription_id),
        storage_skus=AzureStorageSkusClient(credential, subscription_id),
        subscriptions=AzureSubscriptionsClient(credential),
        defender=AzureDefenderClient(credential, subscription_id),
        role_assignments=AzureRoleAssignmentsClient(credential, subscription_id),
        recovery_vaults=AzureRecoveryVaultsClient(credential, subscription_id),
    )
