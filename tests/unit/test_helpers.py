"""
Unit tests for the domain helpers.

Tests versioning, delete protection, region restrictions and the test
container fixtures.
"""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import MagicMock, call

import pytest

from ccc_abs.cloud.base import BlobItem, CloudOperationError, Location, StorageSku
from ccc_abs.helpers.blobs import BlobFixtures
from ccc_abs.helpers.delete_protection import DeleteProtection
from ccc_abs.helpers.regions import RegionRestrictions
from ccc_abs.helpers.versioning import BlobVersioning
from ccc_abs.models import (
    BlobServiceProperties,
    DeleteRetention,
    ImmutabilityPolicyState,
    ImmutabilitySettings,
    RetentionPolicy,
    TestResult,
)

from conftest import PRIMARY_URI


def make_result() -> TestResult:
    return TestResult(description="d", function="CCC_X_TR01_T01")


class TestBlobVersioning:
    """Tests for BlobVersioning."""

    def test_enabled(self, blob_service):
        """Test versioning enabled passes."""
        result = make_result()
        BlobVersioning(blob_service).check_versioning_is_enabled(result)

        assert result.passed is True
        assert result.message == "Versioning is enabled for Storage Account Blobs."

    @pytest.mark.parametrize("enabled", [False, None])
    def test_not_enabled(self, enabled):
        """Test versioning disabled or unset fails."""
        result = make_result()
        versioning = BlobVersioning(BlobServiceProperties(versioning_enabled=enabled))

        versioning.check_versioning_is_enabled(result)

        assert result.passed is False
        assert result.message == "Versioning is not enabled for Storage Account Blobs."

    def test_update_keeps_previous_version(self, blob_service):
        """Test two listed versions after an overwrite pass."""
        blob = MagicMock()
        listing = MagicMock()
        listing.list_blobs.return_value = [
            BlobItem(name="blob", version_id="v1"),
            BlobItem(name="blob", version_id="v2"),
            BlobItem(name="blob-other", version_id="v3"),
        ]
        result = make_result()

        BlobVersioning(blob_service).update_content_and_check_version_available(
            blob, listing, "container", "blob", "updated", result
        )

        blob.upload.assert_called_once_with("updated")
        listing.list_blobs.assert_called_once_with("container", "blob", include_versions=True)
        assert result.passed is True
        assert result.message == "Previous versions are accessible when a blob is updated."

    def test_update_loses_previous_version(self, blob_service):
        """Test a single listed version fails."""
        listing = MagicMock()
        listing.list_blobs.return_value = [BlobItem(name="blob", version_id="v2")]
        result = make_result()

        BlobVersioning(blob_service).update_content_and_check_version_available(
            MagicMock(), listing, "container", "blob", "updated", result
        )

        assert result.passed is False
        assert result.message == "Previous versions are not accessible when a blob is updated."

    def test_update_failed(self, blob_service):
        """Test a failed overwrite fails without listing."""
        blob = MagicMock()
        blob.upload.side_effect = CloudOperationError("conflict")
        listing = MagicMock()
        result = make_result()

        BlobVersioning(blob_service).update_content_and_check_version_available(
            blob, listing, "container", "blob", "updated", result
        )

        listing.list_blobs.assert_not_called()
        assert result.message == "Failed to update blob with error: conflict"

    def test_count_versions_listing_failed(self, blob_service):
        """Test a failed listing returns None."""
        listing = MagicMock()
        listing.list_blobs.side_effect = CloudOperationError("denied")
        result = make_result()

        count = BlobVersioning(blob_service).count_versions(listing, "c", "b", result)

        assert count is None
        assert result.message == "Failed to list blob versions with error: denied"


class TestDeleteProtection:
    """Tests for DeleteProtection."""

    def test_container_soft_delete(self, account, blob_service):
        """Test container soft delete without permanent delete passes with evidence."""
        result = make_result()
        DeleteProtection(account, blob_service).check_container_soft_delete(result)

        assert result.passed is True
        assert result.value == RetentionPolicy(
            name="Soft Delete Policy Retention Period in Days", days=7
        )

    def test_container_soft_delete_permanent_allowed(self, account):
        """Test permanent delete on the blob policy fails container soft delete."""
        blob_service = BlobServiceProperties(
            delete_retention=DeleteRetention(enabled=True, days=7, allow_permanent_delete=True),
            container_delete_retention=DeleteRetention(enabled=True, days=14),
        )
        result = make_result()

        DeleteProtection(account, blob_service).check_container_soft_delete(result)

        assert result.passed is False
        assert result.message.endswith("permanent delete of soft deleted items is allowed.")
        assert result.value.days == 14

    def test_container_soft_delete_disabled(self, account):
        """Test disabled container soft delete fails."""
        result = make_result()
        DeleteProtection(account, BlobServiceProperties()).check_container_soft_delete(result)

        assert result.passed is False
        assert result.message == "Soft delete is not enabled for Storage Account Containers."
        assert result.value is None

    def test_blob_soft_delete(self, account, blob_service):
        """Test blob soft delete passes."""
        result = make_result()
        DeleteProtection(account, blob_service).check_blob_soft_delete(result)

        assert result.passed is True
        assert result.message.startswith("Soft delete is enabled for Storage Account Blobs")

    def test_immutability_locked(self, account, blob_service):
        """Test a locked policy passes with its state as evidence."""
        result = make_result()
        DeleteProtection(account, blob_service).check_immutability_policy_locked(result)

        assert result.passed is True
        assert result.value == ImmutabilityPolicyState(
            name="Immutability Policy State", state="Locked"
        )

    @pytest.mark.parametrize(
        "immutability,message",
        [
            (None, "Immutability is not enabled for Storage Account."),
            (
                ImmutabilitySettings(enabled=True),
                "Immutability policy is not set for the storage account.",
            ),
            (
                ImmutabilitySettings(enabled=True, policy_state="Unlocked"),
                "Immutability policy is not locked.",
            ),
        ],
    )
    def test_immutability_not_locked(self, account, blob_service, immutability, message):
        """Test missing or unlocked policies fail."""
        result = make_result()
        DeleteProtection(
            replace(account, immutability=immutability), blob_service
        ).check_immutability_policy_locked(result)

        assert result.passed is False
        assert result.message == message

    def test_blob_immutability_disabled_policy(self, account, blob_service):
        """Test a disabled account policy fails default retention."""
        result = make_result()
        account = replace(
            account, immutability=ImmutabilitySettings(enabled=True, policy_state="Disabled")
        )

        DeleteProtection(account, blob_service).check_blob_immutability_enabled(result)

        assert result.passed is False
        assert result.message.endswith("but immutability policy is disabled.")

    def test_blob_immutability_unlocked_policy(self, account, blob_service):
        """Test an unlocked active policy is enough for default retention."""
        result = make_result()
        account = replace(
            account, immutability=ImmutabilitySettings(enabled=True, policy_state="Unlocked")
        )

        DeleteProtection(account, blob_service).check_blob_immutability_enabled(result)

        assert result.passed is True


class TestRegionRestrictions:
    """Tests for RegionRestrictions."""

    @pytest.fixture
    def accounts(self):
        return MagicMock()

    @pytest.fixture
    def vaults(self):
        return MagicMock()

    @pytest.fixture
    def regions(self, accounts, vaults, resource_id, sleep):
        storage_skus = MagicMock()
        storage_skus.list.return_value = [
            StorageSku(name="Standard_LRS", locations=("westeurope", "eastus", "West US")),
            StorageSku(name="Standard_ZRS", locations=("northeurope", "eastus")),
        ]
        subscriptions = MagicMock()
        names = iter(["restricted1", "restricted2", "allowed1"])
        return RegionRestrictions(
            accounts=accounts,
            vaults=vaults,
            storage_skus=storage_skus,
            subscriptions=subscriptions,
            resource_id=resource_id,
            allowed_regions=["westeurope", "northeurope"],
            random_string=lambda length: next(names),
            sleep=sleep,
        )

    def test_restricted_regions(self, regions):
        """Test restricted regions are every other offered region."""
        result = make_result()

        assert regions.get_restricted_regions(result) == ["eastus", "westus"]

    def test_deployment_blocked(self, regions, accounts):
        """Test failures in restricted regions and success in an allowed one pass."""
        accounts.create.side_effect = [
            CloudOperationError("RequestDisallowedByPolicy", "RequestDisallowedByPolicy"),
            CloudOperationError("RequestDisallowedByPolicy", "RequestDisallowedByPolicy"),
            None,
        ]
        result = make_result()

        regions.confirm_deployment_blocked(result)

        assert result.passed is True
        assert result.message.startswith("Deployment to all restricted regions failed")
        assert accounts.create.call_args_list == [
            call("rg-ccc", "restricted1", "eastus"),
            call("rg-ccc", "restricted2", "westus"),
            call("rg-ccc", "allowed1", "westeurope"),
        ]
        accounts.delete.assert_called_once_with("rg-ccc", "allowed1")

    def test_created_in_restricted_region(self, regions, accounts):
        """Test a successful restricted creation fails and is cleaned up."""
        result = make_result()

        regions.confirm_deployment_blocked(result)

        assert result.passed is False
        assert result.message == (
            "Successfully created Storage Account in restricted region eastus"
        )
        accounts.delete.assert_called_once_with("rg-ccc", "restricted1")
        assert accounts.create.call_count == 1

    def test_allowed_creation_failed(self, regions, accounts):
        """Test a failing allowed creation fails with the error code."""
        accounts.create.side_effect = CloudOperationError("denied", "AuthorizationFailed")
        result = make_result()

        regions.confirm_deployment_blocked(result)

        assert result.passed is False
        assert result.message.startswith(
            "Failed to create Storage Account in allowed region westeurope."
        )
        assert result.message.endswith("Error code: AuthorizationFailed.")
        accounts.delete.assert_not_called()

    def test_sku_listing_failed(self, regions, accounts):
        """Test a failed SKU listing fails before any creation."""
        regions._storage_skus.list.side_effect = CloudOperationError("denied")
        result = make_result()

        regions.confirm_deployment_blocked(result)

        assert result.message.endswith("with error: denied")
        accounts.create.assert_not_called()

    def test_no_allowed_regions(self, regions, accounts):
        """Test an empty allowed region list fails before any creation."""
        regions.allowed_regions = []
        result = make_result()

        regions.confirm_deployment_blocked(result)

        assert result.passed is False
        assert result.message == (
            "No allowed regions are configured, so deployment to an allowed region cannot "
            "be confirmed."
        )
        accounts.create.assert_not_called()

    def test_vault_deployment_blocked(self, regions, vaults):
        """Test denied vaults in restricted regions and one in an allowed region pass."""
        vaults.create.side_effect = [
            CloudOperationError("RequestDisallowedByPolicy", "RequestDisallowedByPolicy"),
            CloudOperationError("RequestDisallowedByPolicy", "RequestDisallowedByPolicy"),
            None,
        ]
        result = make_result()

        regions.confirm_vault_deployment_blocked(result)

        assert result.passed is True
        assert result.message.startswith("Deployment to all restricted regions failed")
        assert vaults.create.call_args_list == [
            call("rg-ccc", "restricted1", "eastus"),
            call("rg-ccc", "restricted2", "westus"),
            call("rg-ccc", "allowed1", "westeurope"),
        ]
        vaults.delete.assert_called_once_with("rg-ccc", "allowed1")

    def test_vault_created_in_restricted_region(self, regions, vaults, accounts):
        """Test a vault created in a restricted region fails and is deleted."""
        result = make_result()

        regions.confirm_vault_deployment_blocked(result)

        assert result.passed is False
        assert result.message == "Successfully created Backup Vault in restricted region eastus"
        vaults.delete.assert_called_once_with("rg-ccc", "restricted1")
        assert vaults.create.call_count == 1
        accounts.create.assert_not_called()

    def test_vault_delete_retried_on_conflict(self, regions, vaults, sleep):
        """Test a vault busy with another operation is deleted on a later attempt."""
        conflict = CloudOperationError(
            "conflict", "RSVaultUpdateErrorConflictingOperationInProgress"
        )
        vaults.delete.side_effect = [conflict, conflict, None]
        result = make_result()

        regions.confirm_vault_deployment_blocked(result)

        assert result.message == "Successfully created Backup Vault in restricted region eastus"
        assert vaults.delete.call_count == 3
        assert sleep.call_args_list == [call(10.0), call(10.0)]

    def test_vault_delete_failed(self, regions, vaults, sleep):
        """Test a failed vault cleanup is appended to the message."""
        vaults.delete.side_effect = CloudOperationError("locked", "ScopeLocked")
        result = make_result()

        regions.confirm_vault_deployment_blocked(result)

        assert result.message == (
            "Successfully created Backup Vault in restricted region eastus "
            "Failed to delete Backup Vault with error: locked"
        )
        assert vaults.delete.call_count == 1
        sleep.assert_not_called()

    def test_paired_regions_allowed(self, regions):
        """Test paired regions inside the allowed set pass."""
        regions._subscriptions.list_locations.return_value = [
            Location(name="westeurope", paired_regions=("northeurope",)),
            Location(name="northeurope", paired_regions=("westeurope",)),
            Location(name="eastus", paired_regions=("westus",)),
        ]
        result = make_result()

        regions.confirm_paired_regions_allowed(result)

        assert result.passed is True
        regions._subscriptions.list_locations.assert_called_once_with(
            "00000000-0000-0000-0000-000000000000"
        )

    def test_paired_region_restricted(self, regions):
        """Test a restricted paired region fails naming both regions."""
        regions.allowed_regions = ["westeurope"]
        regions._subscriptions.list_locations.return_value = [
            Location(name="westeurope", paired_regions=("northeurope",)),
        ]
        result = make_result()

        regions.confirm_paired_regions_allowed(result)

        assert result.passed is False
        assert "allowed region westeurope, northeurope, is not" in result.message


class TestBlobFixtures:
    """Tests for BlobFixtures."""

    @pytest.fixture
    def containers(self):
        return MagicMock()

    @pytest.fixture
    def blob(self):
        return MagicMock()

    @pytest.fixture
    def fixtures(self, containers, blob, resource_id):
        return BlobFixtures(
            containers=containers,
            block_blob_factory=MagicMock(return_value=blob),
            blob_listing_factory=MagicMock(),
            resource_id=resource_id,
            primary_uri=PRIMARY_URI,
            random_string=lambda length: "x" * length,
        )

    def test_names(self, fixtures):
        """Test random names and the blob URL."""
        assert fixtures.new_container_name() == "privateer-test-container-xxxxxxxx"
        assert fixtures.new_blob_name() == "privateer-test-blob-xxxxxxxx"
        assert fixtures.blob_url("c", "b") == "https://cccabs.blob.core.windows.net/c/b"

    def test_container_with_blob(self, fixtures, containers, blob):
        """Test the container is created, the blob uploaded and the container deleted."""
        result = make_result()

        with fixtures.container_with_blob(result) as fixture:
            assert fixture.container_name == "privateer-test-container-xxxxxxxx"
            assert fixture.blob is blob
            containers.delete.assert_not_called()

        containers.create.assert_called_once_with(
            "rg-ccc", "cccabs", "privateer-test-container-xxxxxxxx"
        )
        blob.upload.assert_called_once_with("Privateer test blob content")
        assert containers.delete.call_count == containers.create.call_count

    def test_cleanup_error_appended(self, fixtures, containers):
        """Test a failed cleanup is appended and keeps the verdict."""
        containers.delete.side_effect = CloudOperationError("locked")
        result = make_result()

        with fixtures.container_with_blob(result):
            result.passed = True
            result.message = "done"

        assert result.passed is True
        assert result.message == "done Failed to delete blob container with error: locked"

    def test_upload_failed(self, fixtures, containers, blob):
        """Test a failed upload yields None and still deletes the container."""
        blob.upload.side_effect = CloudOperationError("denied")
        result = make_result()

        with fixtures.container_with_blob(result) as fixture:
            assert fixture is None

        assert result.message == "Failed to upload blob with error: denied"
        containers.delete.assert_called_once()

    def test_create_failed(self, fixtures, containers):
        """Test a failed container creation deletes nothing."""
        containers.create.side_effect = CloudOperationError("denied")
        result = make_result()

        with fixtures.container_with_blob(result) as fixture:
            assert fixture is None

        assert result.message == "Failed to create blob container with error: denied"
        containers.delete.assert_not_called()

    def test_exception_still_cleans_up(self, fixtures, containers):
        """Test the container is deleted when the body raises."""
        result = make_result()

        with pytest.raises(RuntimeError):
            with fixtures.container_with_blob(result):
                raise RuntimeError("boom")

        containers.delete.assert_called_once()
