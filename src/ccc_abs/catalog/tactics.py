"""
Tactics of the Azure Blob Storage catalog.

Each tactic is an ordered subset of the test requirements, named after
the Traffic Light Protocol level of the information the run may
disclose. ``testing`` is a single requirement tactic used during
development.
"""

from __future__ import annotations

from ccc_abs.catalog import definitions as trs
from ccc_abs.engine.definitions import TRDefinition
from ccc_abs.engine.registry import TacticRegistry

TLP_RED: tuple[TRDefinition, ...] = trs.ALL_DEFINITIONS

TLP_AMBER: tuple[TRDefinition, ...] = tuple(
    definition for definition in trs.ALL_DEFINITIONS if definition is not trs.C07_TR01
)

TLP_CLEAR: tuple[TRDefinition, ...] = (
    trs.C01_TR01,
    trs.C01_TR02,
    trs.C02_TR01,
    trs.C03_TR01,
    trs.C03_TR04,
    trs.C03_TR06,
    trs.C04_TR02,
    trs.C05_TR02,
    trs.C05_TR04,
    trs.C06_TR01,
    trs.C06_TR02,
    trs.C09_TR01,
    trs.C09_TR02,
    trs.C09_TR03,
    trs.C10_TR01,
    trs.C11_TR01,
    trs.OBJSTOR_C01_TR03,
    trs.OBJSTOR_C01_TR04,
    trs.OBJSTOR_C02_TR01,
    trs.OBJSTOR_C02_TR02,
    trs.OBJSTOR_C03_TR01,
    trs.OBJSTOR_C03_TR02,
    trs.OBJSTOR_C04_TR01,
    trs.OBJSTOR_C04_TR02,
    trs.OBJSTOR_C05_TR01,
    trs.OBJSTOR_C05_TR02,
    trs.OBJSTOR_C05_TR03,
    trs.OBJSTOR_C05_TR04,
)

# Clear plus the replication and key rotation requirements, in catalog order
_GREEN_ONLY = {trs.C08_TR01.id, trs.C08_TR02.id, trs.C11_TR02.id}
TLP_GREEN: tuple[TRDefinition, ...] = tuple(
    definition
    for definition in trs.ALL_DEFINITIONS
    if definition in TLP_CLEAR or definition.id in _GREEN_ONLY
)

TESTING: tuple[TRDefinition, ...] = (trs.C04_TR01,)

TACTICS: dict[str, tuple[TRDefinition, ...]] = {
    "tlp_red": TLP_RED,
    "tlp_amber": TLP_AMBER,
    "tlp_green": TLP_GREEN,
    "tlp_clear": TLP_CLEAR,
    "testing": TESTING,
}


def build_registry() -> TacticRegistry:
    """Build the registry of every tactic of the catalog."""
    return TacticRegistry(TACTICS)
