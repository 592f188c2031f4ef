"""
Soft delete and immutability predicates over the target snapshot.
"""

from __future__ import annotations

from ccc_abs.catalog import messages
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import (
    AccountProperties,
    BlobServiceProperties,
    ImmutabilityPolicyState,
    RetentionPolicy,
    TestResult,
)

LOCKED = "locked"
DISABLED = "disabled"


class DeleteProtection:
    """
    Read-only delete protection checks.

    Args:
        account: Account properties of the target
        blob_service: Blob service properties of the target
    """

    def __init__(self, account: AccountProperties, blob_service: BlobServiceProperties):
        self._account = account
        self._blob_service = blob_service

    def check_container_soft_delete(self, result: TestResult) -> None:
        """
        Pass when container soft delete is enabled and permanent delete of
        soft deleted items is not allowed.
        """
        retention = self._blob_service.container_delete_retention
        if not retention.enabled:
            set_result_failure(result, messages.CONTAINER_SOFT_DELETE_DISABLED)
            return

        result.value = RetentionPolicy(
            name=messages.SOFT_DELETE_EVIDENCE_NAME, days=retention.days or 0
        )
        # Permanent delete is only configurable on the blob policy
        if self._blob_service.delete_retention.allow_permanent_delete:
            set_result_failure(result, messages.CONTAINER_SOFT_DELETE_PERMANENT_ALLOWED)
            return

        result.passed = True
        result.message = messages.CONTAINER_SOFT_DELETE_ENABLED

    def check_blob_soft_delete(self, result: TestResult) -> None:
        """
        Pass when blob soft delete is enabled and permanent delete of soft
        deleted items is not allowed.
        """
        retention = self._blob_service.delete_retention
        if not retention.enabled:
            set_result_failure(result, messages.BLOB_SOFT_DELETE_DISABLED)
            return

        result.value = RetentionPolicy(
            name=messages.SOFT_DELETE_EVIDENCE_NAME, days=retention.days or 0
        )
        if retention.allow_permanent_delete:
            set_result_failure(result, messages.BLOB_SOFT_DELETE_PERMANENT_ALLOWED)
            return

        result.passed = True
        result.message = messages.BLOB_SOFT_DELETE_ENABLED

    def _attach_policy_state(self, result: TestResult) -> str | None:
        immutability = self._account.immutability
        if immutability is None or not immutability.policy_state:
            return None
        result.value = ImmutabilityPolicyState(
            name=messages.IMMUTABILITY_EVIDENCE_NAME, state=immutability.policy_state
        )
        return immutability.policy_state.lower()

    def check_immutability_policy_locked(self, result: TestResult) -> None:
        """Pass when the account immutability policy is locked."""
        immutability = self._account.immutability
        if immutability is None or not immutability.enabled:
            set_result_failure(result, messages.IMMUTABILITY_NOT_ENABLED)
            return

        state = self._attach_policy_state(result)
        if state is None:
            set_result_failure(result, messages.IMMUTABILITY_POLICY_NOT_SET)
            return
        if state != LOCKED:
            set_result_failure(result, messages.IMMUTABILITY_POLICY_NOT_LOCKED)
            return

        result.passed = True
        result.message = messages.IMMUTABILITY_POLICY_LOCKED

    def check_blob_immutability_enabled(self, result: TestResult) -> None:
        """Pass when immutability is enabled with an active account policy."""
        immutability = self._account.immutability
        if immutability is None or not immutability.enabled:
            set_result_failure(result, messages.BLOB_IMMUTABILITY_NOT_ENABLED)
            return

        state = self._attach_policy_state(result)
        if state is None:
            set_result_failure(result, messages.BLOB_IMMUTABILITY_NO_POLICY)
            return
        if state == DISABLED:
            set_result_failure(result, messages.BLOB_IMMUTABILITY_POLICY_DISABLED)
            return

        result.passed = True
        result.message = messages.BLOB_IMMUTABILITY_POLICY_SET
