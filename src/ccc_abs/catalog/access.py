"""
Authentication and network access tests (CCC.C03, CCC.C05, CCC.C10,
CCC.ObjStor.C02).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import AllowedIps, TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment


def check_authentication_required_to_modify(env: Environment, result: TestResult) -> None:
    result.passed = True
    result.message = messages.AUTHENTICATION_ALWAYS_REQUIRED


def check_anonymous_access_disabled(env: Environment, result: TestResult) -> None:
    # Unset means the service default, which allows anonymous access
    if env.target.account.allow_blob_public_access is False:
        result.passed = True
        result.message = messages.ANONYMOUS_ACCESS_DISABLED
    else:
        set_result_failure(result, messages.ANONYMOUS_ACCESS_ENABLED)


def check_shared_key_access_disabled(env: Environment, result: TestResult) -> None:
    if env.target.account.allow_shared_key_access is False:
        result.passed = True
        result.message = messages.SHARED_KEY_DISABLED
    else:
        set_result_failure(result, messages.SHARED_KEY_ENABLED)


def check_public_network_access(env: Environment, result: TestResult) -> None:
    """
    Pass when public network access is disabled, or enabled with a
    default deny rule. The allowlist is attached as evidence.
    """
    account = env.target.account
    status = account.public_network_access

    if status == "Disabled":
        result.passed = True
        result.message = messages.PUBLIC_NETWORK_DISABLED
    elif status == "Enabled":
        if account.network_default_action == "Deny":
            result.passed = True
            result.message = messages.PUBLIC_NETWORK_DENY_BY_DEFAULT
            result.value = AllowedIps(
                name=messages.ALLOWED_IPS_EVIDENCE_NAME, ips=tuple(account.ip_rules)
            )
        else:
            set_result_failure(result, messages.PUBLIC_NETWORK_ALLOW_BY_DEFAULT)
    elif status == "SecuredByPerimeter":
        set_result_failure(result, messages.PUBLIC_NETWORK_PERIMETER)
    elif status is None:
        set_result_failure(result, messages.PUBLIC_NETWORK_NOT_REPORTED)
    else:
        set_result_failure(result, messages.PUBLIC_NETWORK_UNCLEAR.format(status=status))


def check_control_plane_network_limited(env: Environment, result: TestResult) -> None:
    set_result_failure(result, messages.CONTROL_PLANE_NETWORK_LIMIT_IMPOSSIBLE)


def check_cross_tenant_access_explicit(env: Environment, result: TestResult) -> None:
    result.passed = True
    result.message = messages.CROSS_TENANT_ACCESS_EXPLICIT


def check_object_replication_bounded(env: Environment, result: TestResult) -> None:
    result.passed = True
    result.message = messages.OBJECT_REPLICATION_BOUNDED
