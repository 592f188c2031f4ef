"""
Region restriction checks and probes.

Restricted regions are every region that offers a storage SKU to the
subscription but is not in the organization's allowed regions.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError
from ccc_abs.cloud.interfaces import (
    AccountsClient,
    RecoveryVaultsClient,
    StorageSkusClient,
    SubscriptionsClient,
)
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import ResourceId, TestResult

logger = logging.getLogger(__name__)

TEST_RESOURCE_NAME_LENGTH = 20
VAULT_DELETE_ATTEMPTS = 6
VAULT_DELETE_RETRY_SECONDS = 10.0
VAULT_CONFLICT_ERROR = "RSVaultUpdateErrorConflictingOperationInProgress"


def _normalize(region: str) -> str:
    return region.replace(" ", "").lower()


class RegionRestrictions:
    """
    Region checks for the target subscription.

    Args:
        accounts: Storage account management client
        vaults: Recovery Services vault management client
        storage_skus: Storage SKU reader
        subscriptions: Subscription location reader
        resource_id: Target account resource id
        allowed_regions: Regions the organization allows, first is the
            known-good deployment target
        random_string: Generator for random resource names
        sleep: Blocks for the given number of seconds
    """

    def __init__(
        self,
        accounts: AccountsClient,
        vaults: RecoveryVaultsClient,
        storage_skus: StorageSkusClient,
        subscriptions: SubscriptionsClient,
        resource_id: ResourceId,
        allowed_regions: list[str],
        random_string: Callable[[int], str],
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._accounts = accounts
        self._vaults = vaults
        self._storage_skus = storage_skus
        self._subscriptions = subscriptions
        self._resource_id = resource_id
        self.allowed_regions = list(allowed_regions)
        self._random_string = random_string
        self._sleep = sleep

    def is_allowed(self, region: str) -> bool:
        """Check if a region is one of the allowed regions."""
        allowed = {_normalize(r) for r in self.allowed_regions}
        return _normalize(region) in allowed

    def get_restricted_regions(self, result: TestResult) -> list[str] | None:
        """
        List the regions offering storage that are not allowed.

        Args:
            result: Test result that receives the error on failure

        Returns:
            Sorted restricted region names, or None when listing failed
        """
        try:
            skus = list(self._storage_skus.list())
        except CloudOperationError as e:
            set_result_failure(result, messages.SKUS_PAGE_FAILED.format(error=e))
            return None

        restricted = {
            _normalize(location)
            for sku in skus
            for location in sku.locations
            if not self.is_allowed(location)
        }
        return sorted(restricted)

    def _confirm_blocked(
        self,
        result: TestResult,
        create: Callable[[str, str, str], None],
        delete: Callable[[str, str], None],
        created_in_restricted: str,
        delete_failed: str,
        create_in_allowed_failed: str,
    ) -> None:
        """
        Create a resource in every restricted region, then in the first
        allowed region.

        Args:
            result: Test result to evaluate into
            create: Creates a resource from (resource group, name, region)
            delete: Deletes a resource from (resource group, name)
            created_in_restricted: Message for a restricted region creation
            delete_failed: Message for a failed cleanup
            create_in_allowed_failed: Message for a failed allowed creation
        """
        if not self.allowed_regions:
            set_result_failure(result, messages.NO_ALLOWED_REGIONS)
            return

        restricted = self.get_restricted_regions(result)
        if restricted is None:
            return

        resource_group = self._resource_id.resource_group
        for region in restricted:
            name = self._random_string(TEST_RESOURCE_NAME_LENGTH)
            try:
                create(resource_group, name, region)
            except CloudOperationError as e:
                logger.debug(f"Creation in restricted region {region} failed: {e}")
                continue

            message = created_in_restricted.format(region=region)
            try:
                delete(resource_group, name)
            except CloudOperationError as e:
                message += " " + delete_failed.format(error=e)
            set_result_failure(result, message)
            return

        allowed_region = self.allowed_regions[0]
        name = self._random_string(TEST_RESOURCE_NAME_LENGTH)
        try:
            create(resource_group, name, allowed_region)
        except CloudOperationError as e:
            set_result_failure(
                result,
                create_in_allowed_failed.format(region=allowed_region, code=e.error_code or e),
            )
            return

        try:
            delete(resource_group, name)
        except CloudOperationError as e:
            set_result_failure(result, delete_failed.format(error=e))
            return

        result.passed = True
        result.message = messages.RESTRICTED_DEPLOYMENT_BLOCKED

    def confirm_deployment_blocked(self, result: TestResult) -> None:
        """
        Pass when storage account creation fails in every restricted region
        and succeeds in the first allowed region.

        Every account created by the probe is deleted again.
        """
        self._confirm_blocked(
            result,
            self._accounts.create,
            self._accounts.delete,
            messages.CREATED_IN_RESTRICTED_REGION,
            messages.DELETE_ACCOUNT_FAILED,
            messages.CREATE_IN_ALLOWED_REGION_FAILED,
        )

    def confirm_vault_deployment_blocked(self, result: TestResult) -> None:
        """
        Pass when backup vault creation fails in every restricted region
        and succeeds in the first allowed region.

        Every vault created by the probe is deleted again.
        """
        self._confirm_blocked(
            result,
            self._vaults.create,
            self._delete_vault,
            messages.CREATED_VAULT_IN_RESTRICTED_REGION,
            messages.DELETE_VAULT_FAILED,
            messages.CREATE_VAULT_IN_ALLOWED_REGION_FAILED,
        )

    def _delete_vault(self, resource_group: str, vault_name: str) -> None:
        # A vault still being provisioned rejects deletion with a conflict
        for attempt in range(1, VAULT_DELETE_ATTEMPTS + 1):
            try:
                self._vaults.delete(resource_group, vault_name)
                return
            except CloudOperationError as e:
                if e.error_code != VAULT_CONFLICT_ERROR or attempt == VAULT_DELETE_ATTEMPTS:
                    raise
                logger.info(
                    f"Vault {vault_name} has an operation in progress, retrying delete "
                    f"in {VAULT_DELETE_RETRY_SECONDS:.0f} seconds"
                )
                self._sleep(VAULT_DELETE_RETRY_SECONDS)

    def confirm_paired_regions_allowed(self, result: TestResult) -> None:
        """Pass when the paired region of every allowed region is also allowed."""
        try:
            locations = list(
                self._subscriptions.list_locations(self._resource_id.subscription_id)
            )
        except CloudOperationError as e:
            set_result_failure(result, messages.LOCATIONS_PAGE_FAILED.format(error=e))
            return

        for location in locations:
            if not self.is_allowed(location.name):
                continue
            for paired in location.paired_regions:
                if not self.is_allowed(paired):
                    set_result_failure(
                        result,
                        messages.PAIRED_REGION_RESTRICTED.format(
                            region=location.name, paired=paired
                        ),
                    )
                    return

        result.passed = True
        result.message = messages.PAIRED_REGIONS_ALLOWED
