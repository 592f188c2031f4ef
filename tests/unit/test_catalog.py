"""
Unit tests for the test requirement table and tactics.
"""

from __future__ import annotations

import pytest

from ccc_abs.catalog import definitions as trs
from ccc_abs.catalog.tactics import (
    TACTICS,
    TESTING,
    TLP_AMBER,
    TLP_CLEAR,
    TLP_GREEN,
    TLP_RED,
    build_registry,
)
from ccc_abs.cloud.base import Location, StorageSku
from ccc_abs.engine import run_test_set


class TestDefinitions:
    """Tests for the structure of the requirement table."""

    def test_ids_unique(self):
        """Test requirement ids are unique."""
        ids = [d.id for d in trs.ALL_DEFINITIONS]

        assert len(ids) == len(set(ids)) == 47
        assert trs.DEFINITIONS_BY_ID["CCC_C01_TR01"] is trs.C01_TR01

    @pytest.mark.parametrize("definition", trs.ALL_DEFINITIONS, ids=lambda d: d.id)
    def test_step_ids_follow_requirement(self, definition):
        """Test step ids extend their requirement id."""
        for step in definition.steps:
            assert step.id.startswith(definition.id + "_T")
            if step.run_if is not None:
                assert step.run_if.startswith(definition.id + "_T")
                earlier = [s.id for s in definition.steps]
                assert earlier.index(step.run_if) < earlier.index(step.id)

    @pytest.mark.parametrize("definition", trs.ALL_DEFINITIONS, ids=lambda d: d.id)
    def test_requirement_has_steps_or_statement(self, definition):
        """Test every requirement either runs tests or states why it cannot."""
        if definition.statement is None:
            assert definition.steps
            assert definition.success_message
            assert definition.failure_message
        else:
            assert not definition.steps

    def test_statement_requirements(self):
        """Test requirements that cannot be asserted on the account."""
        statements = {d.id for d in trs.ALL_DEFINITIONS if d.statement is not None}

        assert statements == {
            "CCC_C03_TR03",
            "CCC_C03_TR04",
            "CCC_C03_TR06",
            "CCC_C11_TR01",
            "CCC_C11_TR04",
            "CCC_ObjStor_C01_TR01",
            "CCC_ObjStor_C01_TR02",
            "CCC_ObjStor_C01_TR03",
            "CCC_ObjStor_C01_TR04",
        }

    def test_provisional_requirements(self):
        """Test the uniform bucket permission requirements are provisional."""
        provisional = {d.id for d in trs.ALL_DEFINITIONS if d.provisional}

        assert provisional == {"CCC_ObjStor_C02_TR01", "CCC_ObjStor_C02_TR02"}

    def test_invasive_requirements(self):
        """Test which requirements mutate the account."""
        invasive = {d.id for d in trs.ALL_DEFINITIONS if d.invasive}

        assert invasive == {
            "CCC_C04_TR03",
            "CCC_C06_TR01",
            "CCC_C06_TR02",
            "CCC_ObjStor_C03_TR01",
            "CCC_ObjStor_C04_TR02",
            "CCC_ObjStor_C05_TR02",
            "CCC_ObjStor_C05_TR03",
            "CCC_ObjStor_C05_TR04",
            "CCC_ObjStor_C06_TR01",
        }

    def test_control_ids(self):
        """Test control ids of each family."""
        assert trs.C01_TR01.control_id == "CCC.C01"
        assert trs.C09_TR02.control_id == "CCC.C09.TR02"
        assert trs.C11_TR03.control_id == "CCC.C11.TR03"
        assert trs.OBJSTOR_C04_TR02.control_id == "CCC.ObjStor.C04"


class TestTactics:
    """Tests for tactic membership."""

    def test_red_is_everything_in_order(self):
        """Test tlp_red is the whole table in catalog order."""
        assert TLP_RED == trs.ALL_DEFINITIONS

    def test_amber_excludes_alerting(self):
        """Test tlp_amber drops only the enumeration alerting requirement."""
        assert trs.C07_TR01 not in TLP_AMBER
        assert len(TLP_AMBER) == len(TLP_RED) - 1

    def test_green_extends_clear(self):
        """Test tlp_green is tlp_clear plus replication and key rotation."""
        green = {d.id for d in TLP_GREEN}
        clear = {d.id for d in TLP_CLEAR}

        assert green - clear == {"CCC_C08_TR01", "CCC_C08_TR02", "CCC_C11_TR02"}
        assert clear <= green

    def test_subsets_keep_catalog_order(self):
        """Test every tactic lists requirements in catalog order."""
        order = {d.id: i for i, d in enumerate(trs.ALL_DEFINITIONS)}
        for definitions in TACTICS.values():
            positions = [order[d.id] for d in definitions]
            assert positions == sorted(positions)

    def test_testing_tactic(self):
        """Test the development tactic."""
        assert [d.id for d in TESTING] == ["CCC_C04_TR01"]

    def test_registry(self):
        """Test the registry holds every tactic."""
        registry = build_registry()

        assert registry.names() == ["testing", "tlp_amber", "tlp_clear", "tlp_green", "tlp_red"]


class TestRequirementsEndToEnd:
    """Run whole requirements against the sample environment."""

    def test_statement_requirement(self, env):
        """Test a statement requirement reports its statement."""
        result = run_test_set(trs.C03_TR03, env)

        assert result.passed is False
        assert result.message.startswith("MFA should be configured")
        assert result.tests == {}

    def test_configuration_requirement_passes(self, env):
        """Test a requirement of snapshot checks over a compliant account."""
        result = run_test_set(trs.C08_TR02, env)

        assert result.passed is True
        assert result.message == (
            "Data is replicated across multiple zones or regions and the replication "
            "state is verified."
        )
        assert list(result.tests) == ["CCC_C08_TR02_T01", "CCC_C08_TR02_T02"]

    def test_invasive_requirement_without_opt_in(self, env):
        """Test invasive probes are recorded as skipped."""
        result = run_test_set(trs.OBJSTOR_C03_TR01, env)

        assert list(result.tests) == [
            "CCC_ObjStor_C03_TR01_T01",
            "CCC_ObjStor_C03_TR01_T02",
            "CCC_ObjStor_C03_TR01_T03",
            "CCC_ObjStor_C03_TR01_T04",
        ]
        assert result.tests["CCC_ObjStor_C03_TR01_T02"].message == "skipped: invasive test"
        assert result.passed is False

    def test_gated_overwrite_not_run_when_configuration_fails(self, env_factory):
        """Test the versioning probe only runs when versioning is enabled."""
        env = env_factory(blob_service_changes={"versioning_enabled": False}, invasive=True)

        result = run_test_set(trs.OBJSTOR_C05_TR04, env)

        assert list(result.tests) == ["CCC_ObjStor_C05_TR04_T01"]
        assert result.passed is False
        env.clients.blob_containers.create.assert_not_called()

    def test_backup_vault_deployment_runs_after_replication_check(self, env_factory):
        """Test the backup vault probe deploys to the first allowed region."""
        env = env_factory(invasive=True)
        env.clients.subscriptions.list_locations.return_value = [
            Location(name="westeurope", paired_regions=("northeurope",)),
        ]
        env.clients.storage_skus.list.return_value = [
            StorageSku(name="Standard_LRS", locations=("westeurope", "northeurope")),
        ]

        result = run_test_set(trs.C06_TR02, env)

        assert list(result.tests) == ["CCC_C06_TR02_T01", "CCC_C06_TR02_T02"]
        assert result.passed is True
        assert result.message == "This service does not replicate data to restricted regions."
        vault_name = env.clients.recovery_vaults.create.call_args[0][1]
        env.clients.recovery_vaults.create.assert_called_once_with(
            "rg-ccc", vault_name, "westeurope"
        )
        env.clients.recovery_vaults.delete.assert_called_once_with("rg-ccc", vault_name)

    def test_provisional_flag_reported(self, env):
        """Test provisional requirements are flagged in their results."""
        provisional = run_test_set(trs.OBJSTOR_C02_TR01, env)
        settled = run_test_set(trs.C08_TR02, env)

        assert provisional.provisional is True
        assert provisional.to_dict()["provisional"] is True
        assert settled.to_dict()["provisional"] is False
