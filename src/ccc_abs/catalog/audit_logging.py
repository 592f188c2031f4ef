"""
Access and change logging tests (CCC.C04, CCC.C05.TR04, CCC.C09,
CCC.ObjStor.C07).

Access tests make a request against the blob endpoint and poll Log
Analytics until the request is logged. Change tests make a management
call and poll the activity log for its correlation id.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

logger = logging.getLogger(__name__)

ROTATED_KEY_NAME = "key2"
READER_ROLE_DEFINITION = (
    "/providers/Microsoft.Authorization/roleDefinitions/acdd72a7-3385-48ef-bd42-f606fba81ae7"
)


def check_logging_configured(env: Environment, result: TestResult) -> None:
    env.logs.confirm_logging_to_log_analytics_is_configured(
        env.target.resource_id.blob_service_id, result
    )


def check_authenticated_access_logged(env: Environment, result: TestResult) -> None:
    """Make an authenticated list request and confirm the 200 response is logged."""
    token = env.tokens.get_token(result)
    if not token:
        return

    response = env.http.get(env.target.primary_uri, token, result)
    if response is None:
        return
    if response.status_code != 200:
        set_result_failure(result, messages.COULD_NOT_AUTHENTICATE)
        return

    env.logs.confirm_http_response_is_logged(response, env.target.resource_id.raw, result)


def check_anonymous_access_logged(env: Environment, result: TestResult) -> None:
    """Make an anonymous list request and confirm the 401 response is logged."""
    response = env.http.get(env.target.primary_uri, "", result)
    if response is None:
        return
    if response.status_code != 401:
        set_result_failure(result, messages.COULD_NOT_FAIL_AUTHENTICATION)
        return

    env.logs.confirm_http_response_is_logged(response, env.target.resource_id.raw, result)


def check_key_rotation_logged(env: Environment, result: TestResult) -> None:
    """Regenerate the secondary access key and confirm the change is logged."""
    resource_id = env.target.resource_id
    activity_time = env.now()
    try:
        headers = env.clients.accounts.regenerate_key(
            resource_id.resource_group, resource_id.account_name, ROTATED_KEY_NAME
        )
    except CloudOperationError as e:
        set_result_failure(result, messages.REGENERATE_KEY_FAILED.format(error=e))
        return

    env.logs.confirm_admin_activity_is_logged(headers, activity_time, result)


def check_role_assignment_logged(env: Environment, result: TestResult) -> None:
    """
    Assign the Reader role to the current principal on the account,
    confirm the change is logged, then revoke the assignment.
    """
    scope = env.target.resource_id.raw
    activity_time = env.now()
    assignment_name = str(uuid.uuid4())

    principal_id = env.tokens.get_principal_id(result)
    if not principal_id:
        return

    try:
        headers = env.clients.role_assignments.create(
            scope, assignment_name, READER_ROLE_DEFINITION, principal_id
        )
    except CloudOperationError as e:
        set_result_failure(result, messages.ASSIGN_PERMISSION_FAILED.format(error=e))
        return

    try:
        env.logs.confirm_admin_activity_is_logged(headers, activity_time, result)
    finally:
        try:
            env.clients.role_assignments.delete(scope, assignment_name)
        except CloudOperationError as e:
            logger.warning(f"Failed to revoke role assignment {assignment_name}: {e}")
            set_result_failure(result, messages.REVOKE_PERMISSION_FAILED.format(error=e))
