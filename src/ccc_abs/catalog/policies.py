"""
Lookup of built-in Azure Policy assignments on the target account.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError, PolicyAssignment
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

POLICY_DEFINITIONS_PATH = "/providers/Microsoft.Authorization/policyDefinitions/"

# Built-in policy definitions
ALLOWED_LOCATIONS_POLICY = POLICY_DEFINITIONS_PATH + "e56962a6-4747-49cd-b67b-bf8b01975c4c"
KEY_ROTATION_POLICY = POLICY_DEFINITIONS_PATH + "d8cf8476-a2ec-4916-896e-992351803c44"
CUSTOMER_MANAGED_KEY_POLICY = POLICY_DEFINITIONS_PATH + "6fac406b-40ca-413b-bf8e-0bf964659c25"

STORAGE_NAMESPACE = "Microsoft.Storage"
STORAGE_ACCOUNTS_TYPE = "storageAccounts"


def find_policy_assignment(
    env: Environment, definition: str, result: TestResult
) -> tuple[bool, PolicyAssignment | None]:
    """
    Find an assignment of a built-in policy that applies to the target account.

    Args:
        env: Run environment
        definition: Policy definition path the assignment must reference
        result: Test result that receives the error on failure

    Returns:
        Tuple of (listing succeeded, matching assignment or None)
    """
    resource_id = env.target.resource_id
    try:
        assignments = list(
            env.clients.policy_assignments.list_for_resource(
                resource_id.resource_group,
                STORAGE_NAMESPACE,
                "",
                STORAGE_ACCOUNTS_TYPE,
                resource_id.account_name,
            )
        )
    except CloudOperationError as e:
        set_result_failure(result, messages.POLICY_PAGE_FAILED.format(error=e))
        return False, None

    definition = definition.lower()
    for assignment in assignments:
        if definition in assignment.policy_definition_id.lower():
            return True, assignment
    return True, None
