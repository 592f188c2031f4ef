"""
Test container and blob fixtures for invasive tests.

Invasive tests create a container with a random name, upload a blob to
it, and always delete the container again when they finish. A failed
cleanup is appended to the result message without changing whether the
test passed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError
from ccc_abs.cloud.interfaces import (
    BlobContainersClient,
    BlobListingClient,
    BlobListingClientFactory,
    BlockBlobClient,
    BlockBlobClientFactory,
)
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import ResourceId, TestResult

logger = logging.getLogger(__name__)

RANDOM_SUFFIX_LENGTH = 8


@dataclass
class BlobFixture:
    """A test container with one blob in it."""

    container_name: str
    blob_name: str
    blob_url: str
    blob: BlockBlobClient


class BlobFixtures:
    """
    Creates and cleans up test containers and blobs.

    Args:
        containers: Blob container management client
        block_blob_factory: Builds a blob client from a blob URL
        blob_listing_factory: Builds a listing client from the account URL
        resource_id: Target account resource id
        primary_uri: Primary blob endpoint of the account
        random_string: Generator for random resource names
    """

    def __init__(
        self,
        containers: BlobContainersClient,
        block_blob_factory: BlockBlobClientFactory,
        blob_listing_factory: BlobListingClientFactory,
        resource_id: ResourceId,
        primary_uri: str,
        random_string: Callable[[int], str],
    ):
        self._containers = containers
        self._block_blob_factory = block_blob_factory
        self._blob_listing_factory = blob_listing_factory
        self._resource_id = resource_id
        self._primary_uri = primary_uri
        self._random_string = random_string

    def new_container_name(self) -> str:
        """Random name for a test container."""
        return messages.TEST_CONTAINER_PREFIX + self._random_string(RANDOM_SUFFIX_LENGTH)

    def new_blob_name(self) -> str:
        """Random name for a test blob."""
        return messages.TEST_BLOB_PREFIX + self._random_string(RANDOM_SUFFIX_LENGTH)

    def blob_url(self, container_name: str, blob_name: str) -> str:
        """Data plane URL of a blob in the target account."""
        return f"{self._primary_uri.rstrip('/')}/{container_name}/{blob_name}"

    def create_container(self, container_name: str, result: TestResult) -> bool:
        """Create a container, recording the error on failure."""
        try:
            self._containers.create(
                self._resource_id.resource_group,
                self._resource_id.account_name,
                container_name,
            )
        except CloudOperationError as e:
            set_result_failure(result, messages.CREATE_CONTAINER_FAILED.format(error=e))
            return False
        logger.debug(f"Created test container {container_name}")
        return True

    def delete_container(self, container_name: str) -> None:
        """
        Delete a container.

        Raises:
            CloudOperationError: If the delete failed
        """
        self._containers.delete(
            self._resource_id.resource_group,
            self._resource_id.account_name,
            container_name,
        )
        logger.debug(f"Deleted test container {container_name}")

    def cleanup_container(self, container_name: str, result: TestResult) -> None:
        """Delete a test container, appending any error to the result message."""
        try:
            self.delete_container(container_name)
        except CloudOperationError as e:
            logger.warning(f"Failed to delete test container {container_name}: {e}")
            error = messages.DELETE_CONTAINER_FAILED.format(error=e)
            result.message = f"{result.message} {error}" if result.message else error

    def get_block_blob_client(self, blob_url: str, result: TestResult) -> BlockBlobClient | None:
        """Build a blob client, recording the error on failure."""
        try:
            return self._block_blob_factory(blob_url)
        except (CloudOperationError, ValueError) as e:
            set_result_failure(result, messages.BLOCK_BLOB_CLIENT_FAILED.format(error=e))
            return None

    def get_listing_client(self, result: TestResult) -> BlobListingClient | None:
        """Build a listing client for the account, recording the error on failure."""
        try:
            return self._blob_listing_factory(self._primary_uri)
        except (CloudOperationError, ValueError) as e:
            set_result_failure(result, messages.BLOB_CLIENT_FAILED.format(error=e))
            return None

    @contextmanager
    def container_with_blob(
        self, result: TestResult, content: str = messages.TEST_BLOB_CONTENT
    ) -> Iterator[BlobFixture | None]:
        """
        Create a test container holding one blob.

        Yields the fixture, or None when setup failed and the error has
        been recorded. The container is deleted on exit whenever it was
        created.

        Args:
            result: Test result that receives setup and cleanup errors
            content: Content of the uploaded blob
        """
        container_name = self.new_container_name()
        blob_name = self.new_blob_name()
        blob_url = self.blob_url(container_name, blob_name)

        blob = self.get_block_blob_client(blob_url, result)
        if blob is None:
            yield None
            return

        if not self.create_container(container_name, result):
            yield None
            return

        try:
            try:
                blob.upload(content)
            except CloudOperationError as e:
                set_result_failure(result, messages.UPLOAD_BLOB_FAILED.format(error=e))
                yield None
            else:
                yield BlobFixture(
                    container_name=container_name,
                    blob_name=blob_name,
                    blob_url=blob_url,
                    blob=blob,
                )
        finally:
            self.cleanup_container(container_name, result)
