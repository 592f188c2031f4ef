"""
Object storage tests (CCC.ObjStor.C03 to CCC.ObjStor.C06).

Configuration tests read the snapshot through the delete protection and
versioning helpers. Invasive tests work on a throwaway container that is
always deleted when the test finishes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

logger = logging.getLogger(__name__)

IMMUTABLE_BLOB_ERROR_CODE = "BlobImmutableDueToPolicy"


# Soft delete


def check_container_soft_delete(env: Environment, result: TestResult) -> None:
    env.protection.check_container_soft_delete(result)


def check_blob_soft_delete(env: Environment, result: TestResult) -> None:
    env.protection.check_blob_soft_delete(result)


def check_deleted_container_recoverable(env: Environment, result: TestResult) -> None:
    """Delete a new container and pass when it is listed as soft deleted."""
    resource_id = env.target.resource_id
    container_name = env.blobs.new_container_name()

    if not env.blobs.create_container(container_name, result):
        return

    try:
        env.blobs.delete_container(container_name)
    except CloudOperationError as e:
        set_result_failure(result, messages.DELETE_CONTAINER_FAILED.format(error=e))
        return

    try:
        containers = list(
            env.clients.blob_containers.list(
                resource_id.resource_group, resource_id.account_name, include_deleted=True
            )
        )
    except CloudOperationError as e:
        set_result_failure(result, messages.LIST_CONTAINERS_FAILED.format(error=e))
        return

    if any(c.name == container_name and c.deleted for c in containers):
        result.passed = True
        result.message = messages.CONTAINER_SOFT_DELETE_WORKING
    else:
        set_result_failure(result, messages.CONTAINER_SOFT_DELETE_NOT_WORKING)


def check_deleted_blob_recoverable(env: Environment, result: TestResult) -> None:
    """Delete a blob and pass when it can be undeleted."""
    with env.blobs.container_with_blob(result) as fixture:
        if fixture is None:
            return

        try:
            fixture.blob.delete()
        except CloudOperationError as e:
            set_result_failure(result, messages.DELETE_BLOB_FAILED.format(error=e))
            return

        try:
            fixture.blob.undelete()
        except CloudOperationError as e:
            set_result_failure(result, messages.UNDELETE_BLOB_FAILED.format(error=e))
            return

        result.passed = True
        result.message = messages.BLOB_RESTORED


# Immutability


def check_immutability_policy_locked(env: Environment, result: TestResult) -> None:
    env.protection.check_immutability_policy_locked(result)


def check_blob_immutability_enabled(env: Environment, result: TestResult) -> None:
    env.protection.check_blob_immutability_enabled(result)


def check_retention_prevents_deletion(env: Environment, result: TestResult) -> None:
    """Pass when deleting a freshly uploaded blob is refused by the retention policy."""
    with env.blobs.container_with_blob(result) as fixture:
        if fixture is None:
            return

        try:
            fixture.blob.delete()
        except CloudOperationError as e:
            if e.error_code == IMMUTABLE_BLOB_ERROR_CODE:
                result.passed = True
                result.message = messages.DELETION_PREVENTED
            else:
                set_result_failure(result, messages.DELETE_FAILED_UNRELATED.format(error=e))
            return

        set_result_failure(result, messages.DELETION_NOT_PREVENTED)


# Versioning


def check_versioning_enabled(env: Environment, result: TestResult) -> None:
    env.versioning.check_versioning_is_enabled(result)


def check_overwritten_blob_keeps_version(env: Environment, result: TestResult) -> None:
    """Overwrite a blob and pass when the previous version is still listed."""
    listing = env.blobs.get_listing_client(result)
    if listing is None:
        return

    with env.blobs.container_with_blob(result) as fixture:
        if fixture is None:
            return

        env.versioning.update_content_and_check_version_available(
            fixture.blob,
            listing,
            fixture.container_name,
            fixture.blob_name,
            messages.UPDATED_BLOB_CONTENT,
            result,
        )


def check_deleted_blob_version_accessible(env: Environment, result: TestResult) -> None:
    """Delete a blob and pass when a version of it is still listed."""
    listing = env.blobs.get_listing_client(result)
    if listing is None:
        return

    with env.blobs.container_with_blob(result) as fixture:
        if fixture is None:
            return

        try:
            fixture.blob.delete()
        except CloudOperationError as e:
            set_result_failure(result, messages.DELETE_BLOB_FAILED.format(error=e))
            return

        count = env.versioning.count_versions(
            listing, fixture.container_name, fixture.blob_name, result
        )
        if count is None:
            return

        if count >= 1:
            result.passed = True
            result.message = messages.DELETED_VERSION_ACCESSIBLE
        else:
            set_result_failure(result, messages.DELETED_VERSION_NOT_ACCESSIBLE)
