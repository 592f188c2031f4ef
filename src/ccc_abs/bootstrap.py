"""
Engine initialization.

Turns an AssessmentConfig into a ready Environment: parses the target
resource id, obtains an Azure credential, builds the cloud clients and
takes the one-shot snapshot of the storage account.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential

from ccc_abs.cloud.azure import build_azure_clients
from ccc_abs.cloud.base import AuthenticationError, CloudOperationError, ConfigurationError
from ccc_abs.cloud.http import HttpTransport
from ccc_abs.cloud.identity import TokenSource
from ccc_abs.cloud.interfaces import CloudClients
from ccc_abs.config import AssessmentConfig
from ccc_abs.environment import Environment, utc_now
from ccc_abs.models import ResourceId, TargetSnapshot

logger = logging.getLogger(__name__)

GEO_REPLICATION_EXPAND = "geoReplicationStats"


def parse_resource_id(resource_id: str) -> ResourceId:
    """
    Parse the target resource id.

    Raises:
        ConfigurationError: If the id is not a storage account resource id
    """
    try:
        return ResourceId.parse(resource_id)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def create_credential() -> Any:
    """
    Create the ambient Azure credential (environment, managed identity, CLI).

    Raises:
        AuthenticationError: If no credential can be created
    """
    try:
        return DefaultAzureCredential()
    except (AzureError, ValueError) as e:
        raise AuthenticationError(f"Failed to initialize Azure credentials: {e}") from e


def load_target(
    clients: CloudClients,
    resource_id: ResourceId,
    now: Callable[[], datetime] = utc_now,
) -> TargetSnapshot:
    """
    Take the snapshot of the target storage account.

    Account properties are requested with geo-replication statistics
    first. Accounts without a secondary reject that expansion, so the
    request is retried without it.

    Args:
        clients: Cloud capability clients
        resource_id: Parsed target resource id
        now: Clock used for the snapshot timestamp

    Returns:
        TargetSnapshot

    Raises:
        CloudOperationError: If the properties cannot be read
    """
    rg = resource_id.resource_group
    name = resource_id.account_name

    try:
        account = clients.accounts.get_properties(rg, name, expand=GEO_REPLICATION_EXPAND)
    except CloudOperationError as e:
        logger.info(f"Could not get geo-replication stats, retrying without them: {e}")
        account = clients.accounts.get_properties(rg, name)
    timestamp = now()

    blob_service = clients.blob_services.get_service_properties(rg, name)
    logger.debug(f"Loaded properties of storage account {name}")

    return TargetSnapshot(
        resource_id=resource_id,
        account=account,
        blob_service=blob_service,
        timestamp=timestamp,
    )


def bootstrap(
    config: AssessmentConfig,
    credential: Any = None,
    clients: CloudClients | None = None,
    http: HttpTransport | None = None,
) -> Environment:
    """
    Initialize the engine for one assessment.

    Args:
        config: Assessment configuration
        credential: Azure credential, DefaultAzureCredential when None
        clients: Cloud clients, built from the credential when None
        http: Transport for data plane probes

    Returns:
        Environment ready to run tactics

    Raises:
        ConfigurationError: If the configuration is incomplete or invalid
        AuthenticationError: If no credential can be created
        CloudOperationError: If the target account cannot be read
    """
    config.validate()
    resource_id = parse_resource_id(config.storage_account_resource_id)

    if credential is None:
        credential = create_credential()
    if clients is None:
        clients = build_azure_clients(credential, resource_id.subscription_id)

    target = load_target(clients, resource_id)
    logger.info(f"Assessing storage account {resource_id.account_name}")

    return Environment.create(
        target=target,
        allowed_regions=config.allowed_regions,
        invasive=config.invasive,
        clients=clients,
        tokens=TokenSource(credential),
        http=http,
        polling=config.polling,
    )
