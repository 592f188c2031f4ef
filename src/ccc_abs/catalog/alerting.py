"""
Enumeration alerting tests (CCC.C07).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

STORAGE_PRICING_PLAN = "StorageAccounts"
STANDARD_TIER = "standard"


def check_defender_for_storage_enabled(env: Environment, result: TestResult) -> None:
    """
    Pass when the Defender for Storage plan is on for the subscription and
    Defender for Storage is enabled for the account.
    """
    defender = env.clients.defender
    try:
        pricings = list(defender.list_pricings())
    except CloudOperationError as e:
        set_result_failure(result, messages.DEFENDER_PRICING_FAILED.format(error=e))
        return

    plan_enabled = any(
        pricing.name == STORAGE_PRICING_PLAN and pricing.pricing_tier.lower() == STANDARD_TIER
        for pricing in pricings
    )
    if not plan_enabled:
        set_result_failure(result, messages.DEFENDER_PLAN_NOT_ENABLED)
        return

    try:
        setting = defender.get_defender_for_storage(env.target.resource_id.raw)
    except CloudOperationError as e:
        set_result_failure(result, messages.DEFENDER_SETTINGS_FAILED.format(error=e))
        return

    if setting.is_enabled:
        result.passed = True
        result.message = messages.DEFENDER_ENABLED
    else:
        set_result_failure(result, messages.DEFENDER_NOT_ENABLED)
