"""
Transport security tests (CCC.C01).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccc_abs.cloud.http import TLS_1_0, TLS_1_1
from ccc_abs.models import TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment


def check_default_tls_version(env: Environment, result: TestResult) -> None:
    token = env.tokens.get_token(result)
    if not token:
        return
    env.tls.check_tls_version(env.target.primary_uri, token, result)


def check_http_not_supported(env: Environment, result: TestResult) -> None:
    env.tls.confirm_http_request_fails(env.target.primary_uri, result)


def check_tls_1_0_not_supported(env: Environment, result: TestResult) -> None:
    env.tls.confirm_outdated_protocol_requests_fail(env.target.primary_uri, TLS_1_0, result)


def check_tls_1_1_not_supported(env: Environment, result: TestResult) -> None:
    env.tls.confirm_outdated_protocol_requests_fail(env.target.primary_uri, TLS_1_1, result)
