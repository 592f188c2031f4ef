"""
HTTP transport for data plane probes.

Probes need the TLS version the server actually negotiated, and need to
pin the client to an outdated TLS version, so requests are made with
http.client over an explicit SSLContext rather than through the SDK.
"""

from __future__ import annotations

import http.client
import logging
import ssl
from dataclasses import dataclass, field
from email.utils import formatdate
from urllib.parse import urlsplit

from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

logger = logging.getLogger(__name__)

STORAGE_API_VERSION = "2025-01-05"
REQUEST_TIMEOUT_SECONDS = 10.0

# TLS protocol versions as they appear on the wire
TLS_1_0 = 0x0301
TLS_1_1 = 0x0302
TLS_1_2 = 0x0303
TLS_1_3 = 0x0304

TLS_VERSION_NAMES = {
    TLS_1_0: "TLS 1.0",
    TLS_1_1: "TLS 1.1",
    TLS_1_2: "TLS 1.2",
    TLS_1_3: "TLS 1.3",
}

_SSL_VERSIONS = {
    TLS_1_0: ssl.TLSVersion.TLSv1,
    TLS_1_1: ssl.TLSVersion.TLSv1_1,
    TLS_1_2: ssl.TLSVersion.TLSv1_2,
    TLS_1_3: ssl.TLSVersion.TLSv1_3,
}

_NEGOTIATED_VERSIONS = {
    "TLSv1": TLS_1_0,
    "TLSv1.1": TLS_1_1,
    "TLSv1.2": TLS_1_2,
    "TLSv1.3": TLS_1_3,
}


def tls_version_name(version: int) -> str:
    """Human readable name of a wire TLS version."""
    return TLS_VERSION_NAMES.get(version, f"0x{version:04X}")


@dataclass(frozen=True)
class HttpResponse:
    """
    Response of a probe request. The body has already been read and
    the connection closed.

    Attributes:
        status_code: HTTP status code
        status: Status line, code followed by reason phrase
        headers: Response headers with lower-cased names
        tls_version: Negotiated wire TLS version, None for plain HTTP
        url: Requested URL
        host: Requested host
    """

    status_code: int
    status: str
    headers: dict[str, str] = field(default_factory=dict)
    tls_version: int | None = None
    url: str = ""
    host: str = ""

    def header(self, name: str) -> str:
        """Get a header value, empty when absent."""
        return self.headers.get(name.lower(), "")


def build_ssl_context(
    min_tls_version: int | None = None, max_tls_version: int | None = None
) -> ssl.SSLContext:
    """Create a client SSLContext limited to the given TLS versions."""
    context = ssl.create_default_context()
    if min_tls_version is not None:
        context.minimum_version = _SSL_VERSIONS[min_tls_version]
        if min_tls_version < TLS_1_2:
            # OpenSSL refuses TLS 1.0/1.1 at the default security level
            context.set_ciphers("DEFAULT:@SECLEVEL=0")
    if max_tls_version is not None:
        context.maximum_version = _SSL_VERSIONS[max_tls_version]
    return context


def build_request_headers(token: str = "") -> dict[str, str]:
    """Headers sent with every probe request."""
    headers = {
        "x-ms-version": STORAGE_API_VERSION,
        "x-ms-date": formatdate(usegmt=True),
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class HttpTransport:
    """Makes GET requests against the blob endpoint for probes."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.timeout = timeout

    def _connect(
        self,
        scheme: str,
        host: str,
        port: int | None,
        min_tls_version: int | None,
        max_tls_version: int | None,
    ) -> http.client.HTTPConnection:
        if scheme == "https":
            context = build_ssl_context(min_tls_version, max_tls_version)
            return http.client.HTTPSConnection(
                host, port, timeout=self.timeout, context=context
            )
        return http.client.HTTPConnection(host, port, timeout=self.timeout)

    def get(
        self,
        endpoint: str,
        token: str,
        result: TestResult,
        min_tls_version: int | None = None,
        max_tls_version: int | None = None,
    ) -> HttpResponse | None:
        """
        List containers at the endpoint.

        Args:
            endpoint: Blob endpoint URL, ``?comp=list`` is appended
            token: Bearer token, empty for an anonymous request
            result: Test result that receives the error on failure
            min_tls_version: Lowest wire TLS version to offer
            max_tls_version: Highest wire TLS version to offer

        Returns:
            HttpResponse, or None when the request failed
        """
        url = endpoint + "?comp=list"
        parts = urlsplit(url)
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"

        try:
            conn = self._connect(
                parts.scheme, parts.hostname or "", parts.port, min_tls_version, max_tls_version
            )
        except (KeyError, ValueError, ssl.SSLError) as e:
            set_result_failure(result, "Request creation failed with error:" + str(e))
            return None

        try:
            conn.request("GET", path, headers=build_request_headers(token))

            tls_version = None
            sock = conn.sock
            if isinstance(sock, ssl.SSLSocket):
                tls_version = _NEGOTIATED_VERSIONS.get(sock.version() or "")

            response = conn.getresponse()
            response.read()
            logger.debug(f"GET {url} returned {response.status} over {tls_version}")

            return HttpResponse(
                status_code=response.status,
                status=f"{response.status} {response.reason}",
                headers={k.lower(): v for k, v in response.getheaders()},
                tls_version=tls_version,
                url=url,
                host=parts.hostname or "",
            )
        except (OSError, http.client.HTTPException) as e:
            set_result_failure(result, "Request unexpectedly failed with error:" + str(e))
            return None
        finally:
            conn.close()
