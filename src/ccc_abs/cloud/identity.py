"""
Access tokens for the storage data plane.

Tokens are acquired through an Azure credential and cached until five
minutes before they expire.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import time
from typing import Any, Callable

from azure.core.exceptions import AzureError

from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

logger = logging.getLogger(__name__)

STORAGE_SCOPE = "https://storage.azure.com/.default"
REFRESH_MARGIN_SECONDS = 5 * 60


class TokenSource:
    """
    Bearer tokens for the storage scope.

    Args:
        credential: Azure credential exposing ``get_token(scope)``
        clock: Returns the current epoch time in seconds
    """

    def __init__(self, credential: Any, clock: Callable[[], float] = time.time):
        self._credential = credential
        self._clock = clock
        self._token: str = ""
        self._expires_on: float = 0.0

    def _is_valid(self) -> bool:
        return bool(self._token) and self._expires_on - REFRESH_MARGIN_SECONDS > self._clock()

    def get_token(self, result: TestResult) -> str:
        """
        Get a bearer token for the storage scope.

        Args:
            result: Test result that receives the error on failure

        Returns:
            Token string, empty when acquisition failed
        """
        if self._is_valid():
            logger.debug("Using existing access token")
            return self._token

        logger.debug("Getting new access token")
        try:
            access_token = self._credential.get_token(STORAGE_SCOPE)
        except AzureError as e:
            set_result_failure(result, f"Failed to get access token: {e}")
            return ""

        self._token = access_token.token
        self._expires_on = float(access_token.expires_on)
        return self._token

    def get_principal_id(self, result: TestResult) -> str:
        """
        Get the object id of the principal the token was issued to.

        Args:
            result: Test result that receives the error on failure

        Returns:
            Principal object id, empty on failure
        """
        token = self.get_token(result)
        if not token:
            return ""

        parts = token.split(".")
        if len(parts) < 2:
            set_result_failure(result, "Invalid token format")
            return ""

        payload = parts[1] + "=" * (-len(parts[1]) % 4)
        try:
            claims = json.loads(base64.urlsafe_b64decode(payload))
        except (binascii.Error, ValueError) as e:
            set_result_failure(result, f"Failed to decode token: {e}")
            return ""

        principal_id = claims.get("oid") if isinstance(claims, dict) else None
        if not principal_id:
            set_result_failure(result, "Token does not contain an object id claim")
            return ""
        return str(principal_id)
