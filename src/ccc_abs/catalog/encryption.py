"""
Encryption tests (CCC.C02, CCC.C11).

Encryption at rest is read from the account snapshot. Key rotation and
customer-managed key requirements are confirmed through assignments of
built-in Azure Policies; custom policies are not evaluated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.catalog.policies import (
    CUSTOMER_MANAGED_KEY_POLICY,
    KEY_ROTATION_POLICY,
    find_policy_assignment,
)
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import KeyRotationPolicy, TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

MICROSOFT_KEY_SOURCE = "microsoft.storage"
KEY_VAULT_KEY_SOURCE = "microsoft.keyvault"
MAXIMUM_DAYS_TO_ROTATE_PARAMETER = "maximumDaysToRotate"


def check_encryption_enabled(env: Environment, result: TestResult) -> None:
    account = env.target.account
    if not account.blob_encryption_enabled:
        set_result_failure(result, messages.ENCRYPTION_NOT_ENABLED)
        return

    result.passed = True
    if (account.key_source or "").lower() == MICROSOFT_KEY_SOURCE:
        result.message = messages.ENCRYPTION_MICROSOFT_KEYS
    else:
        result.message = messages.ENCRYPTION_CUSTOMER_KEYS


def check_encryption_auditable(env: Environment, result: TestResult) -> None:
    account = env.target.account
    key_source = (account.key_source or "").lower()

    if key_source == MICROSOFT_KEY_SOURCE:
        result.passed = True
        result.message = messages.AUDIT_MICROSOFT_KEYS
    elif key_source == KEY_VAULT_KEY_SOURCE:
        result.passed = True
        result.message = messages.AUDIT_CUSTOMER_KEYS.format(uri=account.key_vault_uri or "")
    else:
        set_result_failure(result, messages.AUDIT_NOT_AVAILABLE)


def check_key_rotation_policy_assigned(env: Environment, result: TestResult) -> None:
    listed, assignment = find_policy_assignment(env, KEY_ROTATION_POLICY, result)
    if not listed:
        return
    if assignment is None:
        set_result_failure(result, messages.KEY_ROTATION_POLICY_NOT_ASSIGNED)
        return

    result.passed = True
    result.message = messages.KEY_ROTATION_POLICY_ASSIGNED
    days = assignment.parameters.get(MAXIMUM_DAYS_TO_ROTATE_PARAMETER)
    if days is not None:
        result.value = KeyRotationPolicy(
            name=messages.KEY_ROTATION_EVIDENCE_NAME, days=int(days)
        )


def check_customer_managed_key_policy_assigned(env: Environment, result: TestResult) -> None:
    listed, assignment = find_policy_assignment(env, CUSTOMER_MANAGED_KEY_POLICY, result)
    if not listed:
        return
    if assignment is None:
        set_result_failure(result, messages.CMK_POLICY_NOT_ASSIGNED)
        return

    result.passed = True
    result.message = messages.CMK_POLICY_ASSIGNED
