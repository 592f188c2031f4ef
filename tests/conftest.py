"""
Pytest configuration and fixtures for CCC ABS tests.

This module provides a sample storage account snapshot and an
Environment wired to MagicMock cloud clients, so that every test check
can run without reaching Azure.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from ccc_abs.cloud.http import HttpResponse
from ccc_abs.config import LogPollingSettings
from ccc_abs.environment import Environment
from ccc_abs.models import (
    AccountProperties,
    BlobServiceProperties,
    DeleteRetention,
    ImmutabilitySettings,
    ResourceId,
    TargetSnapshot,
    TestResult,
)

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"
RESOURCE_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg-ccc"
    "/providers/Microsoft.Storage/storageAccounts/cccabs"
)
PRIMARY_URI = "https://cccabs.blob.core.windows.net/"
SNAPSHOT_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
ALLOWED_REGIONS = ["westeurope", "northeurope"]


def make_response(
    status_code: int = 200,
    reason: str = "OK",
    headers: dict[str, str] | None = None,
    tls_version: int | None = None,
    url: str = PRIMARY_URI + "?comp=list",
) -> HttpResponse:
    """Build a probe response."""
    return HttpResponse(
        status_code=status_code,
        status=f"{status_code} {reason}",
        headers=headers or {},
        tls_version=tls_version,
        url=url,
        host="cccabs.blob.core.windows.net",
    )


@pytest.fixture
def result() -> TestResult:
    """Return a fresh TestResult."""
    return TestResult(description="test", function="CCC_TEST_TR01_T01")


@pytest.fixture
def resource_id() -> ResourceId:
    """Return the parsed sample resource id."""
    return ResourceId.parse(RESOURCE_ID)


@pytest.fixture
def account() -> AccountProperties:
    """Return account properties that satisfy every configuration check."""
    return AccountProperties(
        name="cccabs",
        location="westeurope",
        sku_name="Standard_RAGZRS",
        primary_blob_endpoint=PRIMARY_URI,
        blob_encryption_enabled=True,
        key_source="Microsoft.Storage",
        allow_blob_public_access=False,
        allow_shared_key_access=False,
        public_network_access="Enabled",
        network_default_action="Deny",
        ip_rules=("203.0.113.0/24",),
        status_of_secondary="available",
        last_sync_time=SNAPSHOT_TIME - timedelta(minutes=5),
        immutability=ImmutabilitySettings(enabled=True, policy_state="Locked", period_days=7),
    )


@pytest.fixture
def blob_service() -> BlobServiceProperties:
    """Return blob service properties with versioning and soft delete on."""
    return BlobServiceProperties(
        versioning_enabled=True,
        delete_retention=DeleteRetention(enabled=True, days=7),
        container_delete_retention=DeleteRetention(enabled=True, days=7),
    )


@pytest.fixture
def clients() -> MagicMock:
    """Return MagicMock cloud clients."""
    return MagicMock()


@pytest.fixture
def tokens() -> MagicMock:
    """Return a token source that always has a token."""
    source = MagicMock()
    source.get_token.return_value = "token"
    source.get_principal_id.return_value = "11111111-1111-1111-1111-111111111111"
    return source


@pytest.fixture
def http() -> MagicMock:
    """Return a MagicMock probe transport."""
    return MagicMock()


@pytest.fixture
def sleep() -> MagicMock:
    """Return a sleep that records its calls instead of blocking."""
    return MagicMock()


@pytest.fixture
def env_factory(
    resource_id: ResourceId,
    account: AccountProperties,
    blob_service: BlobServiceProperties,
    clients: MagicMock,
    tokens: MagicMock,
    http: MagicMock,
    sleep: MagicMock,
) -> Callable[..., Environment]:
    """
    Return a factory building an Environment over the sample snapshot.

    ``account_changes`` and ``blob_service_changes`` map field names to the
    values replaced on the sample properties.
    """

    def factory(
        account_changes: dict[str, Any] | None = None,
        blob_service_changes: dict[str, Any] | None = None,
        invasive: bool = False,
        allowed_regions: list[str] | None = None,
        polling: LogPollingSettings | None = None,
    ) -> Environment:
        target = TargetSnapshot(
            resource_id=resource_id,
            account=replace(account, **(account_changes or {})),
            blob_service=replace(blob_service, **(blob_service_changes or {})),
            timestamp=SNAPSHOT_TIME,
        )
        return Environment.create(
            target=target,
            allowed_regions=allowed_regions or list(ALLOWED_REGIONS),
            invasive=invasive,
            clients=clients,
            tokens=tokens,
            http=http,
            polling=polling or LogPollingSettings(),
            random_string=lambda length: "a" * length,
            sleep=sleep,
            now=lambda: SNAPSHOT_TIME,
        )

    return factory


@pytest.fixture
def env(env_factory: Callable[..., Environment]) -> Environment:
    """Return an Environment over the sample snapshot."""
    return env_factory()
