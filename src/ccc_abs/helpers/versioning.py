"""
Blob versioning checks and probes.
"""

from __future__ import annotations

import logging

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError
from ccc_abs.cloud.interfaces import BlobListingClient, BlockBlobClient
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import BlobServiceProperties, TestResult

logger = logging.getLogger(__name__)


class BlobVersioning:
    """
    Versioning checks over the blob service snapshot.

    Args:
        blob_service: Blob service properties of the target account
    """

    def __init__(self, blob_service: BlobServiceProperties):
        self._blob_service = blob_service

    def check_versioning_is_enabled(self, result: TestResult) -> None:
        """Pass when blob versioning is set and enabled."""
        if self._blob_service.versioning_enabled:
            result.passed = True
            result.message = messages.VERSIONING_ENABLED
        else:
            set_result_failure(result, messages.VERSIONING_NOT_ENABLED)

    def count_versions(
        self,
        listing: BlobListingClient,
        container_name: str,
        blob_name: str,
        result: TestResult,
    ) -> int | None:
        """
        Count the listed versions of a blob.

        Returns:
            Number of entries named ``blob_name``, or None when listing failed
        """
        try:
            items = list(listing.list_blobs(container_name, blob_name, include_versions=True))
        except CloudOperationError as e:
            set_result_failure(result, messages.LIST_VERSIONS_FAILED.format(error=e))
            return None

        count = sum(1 for item in items if item.name == blob_name)
        logger.debug(f"Found {count} versions of blob {blob_name}")
        return count

    def update_content_and_check_version_available(
        self,
        blob: BlockBlobClient,
        listing: BlobListingClient,
        container_name: str,
        blob_name: str,
        content: str,
        result: TestResult,
    ) -> None:
        """
        Overwrite a blob and pass when its previous version is still listed.

        Args:
            blob: Client of the blob to overwrite
            listing: Listing client of the account
            container_name: Container holding the blob
            blob_name: Name of the blob
            content: New blob content
            result: Test result to evaluate into
        """
        try:
            blob.upload(content)
        except CloudOperationError as e:
            set_result_failure(result, messages.UPDATE_BLOB_FAILED.format(error=e))
            return

        count = self.count_versions(listing, container_name, blob_name, result)
        if count is None:
            return

        if count >= 2:
            result.passed = True
            result.message = messages.PREVIOUS_VERSIONS_ACCESSIBLE
        else:
            set_result_failure(result, messages.PREVIOUS_VERSIONS_NOT_ACCESSIBLE)
