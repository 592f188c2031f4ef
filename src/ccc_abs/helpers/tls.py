"""
Transport security probes against the blob endpoint.

The storage service rejects plain HTTP and stale TLS with a 400 status
whose reason phrase names the problem, so the probes match on the
``http`` and ``TLS version`` tokens of the status line.
"""

from __future__ import annotations

import logging

from ccc_abs.catalog import messages
from ccc_abs.cloud.http import (
    TLS_1_0,
    TLS_1_1,
    TLS_1_2,
    TLS_1_3,
    HttpTransport,
    tls_version_name,
)
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

logger = logging.getLogger(__name__)

HTTP_REJECTED_TOKEN = "http"
TLS_REJECTED_TOKEN = "TLS version"

_TLS_VERDICTS = {
    TLS_1_3: (True, messages.TLS_1_3_USED),
    TLS_1_2: (True, messages.TLS_1_2_USED),
    TLS_1_1: (False, messages.TLS_1_1_USED),
    TLS_1_0: (False, messages.TLS_1_0_USED),
}


class TlsProbe:
    """
    Probes the negotiated and accepted TLS versions of an endpoint.

    Args:
        http: Transport used for the probe requests
    """

    def __init__(self, http: HttpTransport):
        self._http = http

    def check_tls_version(self, endpoint: str, token: str, result: TestResult) -> None:
        """Pass when the default negotiated version is TLS 1.2 or TLS 1.3."""
        response = self._http.get(endpoint, token, result, min_tls_version=TLS_1_0)
        if response is None:
            return

        if response.tls_version is None:
            set_result_failure(result, messages.TLS_NO_INFORMATION)
            return

        verdict = _TLS_VERDICTS.get(response.tls_version)
        if verdict is None:
            set_result_failure(result, messages.TLS_UNKNOWN_VERSION)
            return

        passed, message = verdict
        if passed:
            result.passed = True
            result.message = message
        else:
            set_result_failure(result, message)

    def confirm_http_request_fails(self, endpoint: str, result: TestResult) -> None:
        """Pass when a plain HTTP request is rejected by the service."""
        http_endpoint = endpoint.replace("https://", "http://", 1)
        response = self._http.get(http_endpoint, "", result)
        if response is None:
            return

        if response.status_code == 400 and HTTP_REJECTED_TOKEN in response.status:
            result.passed = True
            result.message = messages.HTTP_NOT_SUPPORTED
        else:
            set_result_failure(result, messages.HTTP_SUPPORTED)

    def confirm_outdated_protocol_requests_fail(
        self, endpoint: str, tls_version: int, result: TestResult
    ) -> None:
        """Pass when a request pinned to an outdated TLS version is rejected."""
        name = tls_version_name(tls_version)
        response = self._http.get(
            endpoint,
            "",
            result,
            min_tls_version=tls_version,
            max_tls_version=tls_version,
        )
        if response is None:
            # Transport error is already in the result message
            result.passed = False
            return

        logger.debug(f"Request pinned to {name} returned {response.status}")
        if response.status_code == 400 and TLS_REJECTED_TOKEN in response.status:
            result.passed = True
            result.message = messages.INSECURE_TLS_NOT_SUPPORTED.format(version=name)
        else:
            set_result_failure(
                result, messages.INSECURE_TLS_SUPPORTED.format(version=name)
            )
