"""
Unit tests for engine initialization.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ccc_abs import bootstrap as engine_bootstrap
from ccc_abs.cloud.base import (
    AuthenticationError,
    CloudOperationError,
    ConfigurationError,
)
from ccc_abs.config import AssessmentConfig, LogPollingSettings

from conftest import RESOURCE_ID, SNAPSHOT_TIME


class TestParseResourceId:
    """Tests for parse_resource_id."""

    def test_invalid(self):
        """Test an invalid id is a configuration error."""
        with pytest.raises(ConfigurationError):
            engine_bootstrap.parse_resource_id("/subscriptions/x")


class TestCreateCredential:
    """Tests for create_credential."""

    def test_credential_failure(self):
        """Test a credential that cannot be created is an authentication error."""
        with patch.object(
            engine_bootstrap, "DefaultAzureCredential", side_effect=ValueError("no identity")
        ):
            with pytest.raises(AuthenticationError, match="no identity"):
                engine_bootstrap.create_credential()


class TestLoadTarget:
    """Tests for load_target."""

    def test_with_geo_replication(self, clients, resource_id, account, blob_service):
        """Test properties are read with geo-replication statistics."""
        clients.accounts.get_properties.return_value = account
        clients.blob_services.get_service_properties.return_value = blob_service

        target = engine_bootstrap.load_target(clients, resource_id, now=lambda: SNAPSHOT_TIME)

        clients.accounts.get_properties.assert_called_once_with(
            "rg-ccc", "cccabs", expand="geoReplicationStats"
        )
        assert target.account is account
        assert target.blob_service is blob_service
        assert target.timestamp == SNAPSHOT_TIME
        assert target.primary_uri == "https://cccabs.blob.core.windows.net/"

    def test_retry_without_geo_replication(self, clients, resource_id, account):
        """Test the expansion is dropped when the service rejects it."""
        clients.accounts.get_properties.side_effect = [
            CloudOperationError("not supported"),
            account,
        ]

        target = engine_bootstrap.load_target(clients, resource_id, now=lambda: SNAPSHOT_TIME)

        assert target.account is account
        assert clients.accounts.get_properties.call_args_list[1][0] == ("rg-ccc", "cccabs")

    def test_account_unreadable(self, clients, resource_id):
        """Test a failing retry propagates."""
        clients.accounts.get_properties.side_effect = CloudOperationError("not found")

        with pytest.raises(CloudOperationError):
            engine_bootstrap.load_target(clients, resource_id)


class TestBootstrap:
    """Tests for bootstrap."""

    def test_bootstrap(self, clients, account, blob_service, http):
        """Test the environment carries the configuration and snapshot."""
        clients.accounts.get_properties.return_value = account
        clients.blob_services.get_service_properties.return_value = blob_service
        config = AssessmentConfig(
            storage_account_resource_id=RESOURCE_ID,
            allowed_regions=["westeurope"],
            invasive=True,
            polling=LogPollingSettings(polling_delay_seconds=5),
        )

        env = engine_bootstrap.bootstrap(
            config, credential=MagicMock(), clients=clients, http=http
        )

        assert env.invasive is True
        assert env.allowed_regions == ["westeurope"]
        assert env.target.resource_id.account_name == "cccabs"
        assert env.http is http
        assert env.polling.polling_delay_seconds == 5
        assert env.logs.polling is env.polling

    def test_invalid_configuration(self, clients):
        """Test validation runs before any cloud call."""
        with pytest.raises(ConfigurationError):
            engine_bootstrap.bootstrap(AssessmentConfig(), credential=MagicMock(), clients=clients)

        clients.accounts.get_properties.assert_not_called()

    def test_builds_clients(self, clients, account, blob_service):
        """Test clients are built for the target subscription."""
        clients.accounts.get_properties.return_value = account
        clients.blob_services.get_service_properties.return_value = blob_service
        credential = MagicMock()
        config = AssessmentConfig(
            storage_account_resource_id=RESOURCE_ID, allowed_regions=["westeurope"]
        )

        with patch.object(
            engine_bootstrap, "build_azure_clients", return_value=clients
        ) as build:
            engine_bootstrap.bootstrap(config, credential=credential)

        build.assert_called_once_with(credential, "00000000-0000-0000-0000-000000000000")
