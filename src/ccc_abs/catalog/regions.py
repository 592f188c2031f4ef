"""
Data residency tests (CCC.C06).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccc_abs.catalog import messages
from ccc_abs.catalog.policies import ALLOWED_LOCATIONS_POLICY, find_policy_assignment
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import TestResult

if TYPE_CHECKING:
    from ccc_abs.environment import Environment

ALLOWED_LOCATIONS_PARAMETER = "listOfAllowedLocations"


def _region_set(regions: list[str]) -> set[str]:
    return {region.replace(" ", "").lower() for region in regions}


def check_allowed_locations_policy(env: Environment, result: TestResult) -> None:
    """
    Pass when the built-in Allowed locations policy is assigned and allows
    exactly the allowed regions.
    """
    listed, assignment = find_policy_assignment(env, ALLOWED_LOCATIONS_POLICY, result)
    if not listed:
        return
    if assignment is None:
        set_result_failure(result, messages.ALLOWED_LOCATIONS_NOT_ASSIGNED)
        return

    policy_regions = _region_set(
        [str(r) for r in assignment.parameters.get(ALLOWED_LOCATIONS_PARAMETER) or []]
    )
    allowed = _region_set(env.allowed_regions)
    prefix = messages.ALLOWED_LOCATIONS_POLICY_IN_PLACE

    extra = sorted(policy_regions - allowed)
    if extra:
        set_result_failure(
            result,
            messages.ALLOWED_LOCATIONS_EXTRA.format(prefix=prefix, regions=", ".join(extra)),
        )
        return

    missing = sorted(allowed - policy_regions)
    if missing:
        set_result_failure(
            result,
            messages.ALLOWED_LOCATIONS_MISSING.format(prefix=prefix, regions=", ".join(missing)),
        )
        return

    result.passed = True
    result.message = messages.ALLOWED_LOCATIONS_MATCH.format(
        prefix=prefix, regions=", ".join(env.allowed_regions)
    )


def check_restricted_region_deployment_blocked(env: Environment, result: TestResult) -> None:
    env.regions.confirm_deployment_blocked(result)


def check_paired_regions_allowed(env: Environment, result: TestResult) -> None:
    env.regions.confirm_paired_regions_allowed(result)


def check_restricted_region_backup_blocked(env: Environment, result: TestResult) -> None:
    env.regions.confirm_vault_deployment_blocked(result)
