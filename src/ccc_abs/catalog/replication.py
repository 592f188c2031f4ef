"""
Replication tests (CCC.C08).
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import SKU, LastSyncTime, TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

MAXIMUM_SYNC_LAG = timedelta(minutes=15)
SECONDARY_AVAILABLE = "available"

# Matched against the SKU name in order
GEO_REDUNDANT_MARKERS = ("GRS", "RAGRS", "GZRS", "RAGZRS")


def check_replication_sku(env: Environment, result: TestResult) -> None:
    """Pass when the SKU replicates across zones or regions."""
    sku_name = env.target.account.sku_name
    result.value = SKU(sku_name=sku_name)

    if "ZRS" in sku_name:
        result.passed = True
        result.message = messages.REPLICATED_ACROSS_ZONES
    elif any(marker in sku_name for marker in GEO_REDUNDANT_MARKERS):
        result.passed = True
        result.message = messages.REPLICATED_ACROSS_REGIONS
    elif "LRS" in sku_name:
        set_result_failure(result, messages.NOT_REPLICATED)
    else:
        set_result_failure(result, messages.REPLICATION_UNKNOWN)


def check_secondary_available(env: Environment, result: TestResult) -> None:
    status = env.target.account.status_of_secondary
    if not status:
        set_result_failure(result, messages.SECONDARY_NOT_ENABLED)
    elif status.lower() == SECONDARY_AVAILABLE:
        result.passed = True
        result.message = messages.SECONDARY_AVAILABLE
    else:
        set_result_failure(result, messages.SECONDARY_NOT_AVAILABLE)


def check_last_sync_time(env: Environment, result: TestResult) -> None:
    """Pass when the last geo-replication sync is at most 15 minutes old."""
    last_sync = env.target.account.last_sync_time
    if last_sync is None:
        set_result_failure(result, messages.LAST_SYNC_NOT_AVAILABLE)
        return

    result.value = LastSyncTime(name=messages.LAST_SYNC_EVIDENCE_NAME, value=last_sync)
    if env.target.timestamp - last_sync <= MAXIMUM_SYNC_LAG:
        result.passed = True
        result.message = messages.LAST_SYNC_RECENT
    else:
        set_result_failure(result, messages.LAST_SYNC_STALE)
