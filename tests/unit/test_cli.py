"""
Unit tests for the CLI.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from ccc_abs.cli import create_parser, format_report, format_table, main
from ccc_abs.cloud.base import AuthenticationError
from ccc_abs.models import RunReport, TestResult, TestSetResult

from conftest import RESOURCE_ID


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "CCC_ABS_CONFIG_FILE",
        "CCC_ABS_STORAGE_ACCOUNT_RESOURCE_ID",
        "CCC_ABS_ALLOWED_REGIONS",
        "CCC_ABS_INVASIVE",
        "CCC_ABS_TACTIC",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def bootstrapped(clean_env, env):
    """Replace engine initialization with the sample environment."""
    configs = []

    def bootstrap(config):
        configs.append(config)
        return env

    clean_env.setattr("ccc_abs.bootstrap.bootstrap", bootstrap)
    return configs


def run_args(*extra: str) -> list[str]:
    return [
        "run",
        "--resource-id",
        RESOURCE_ID,
        "--allowed-regions",
        "westeurope,northeurope",
        *extra,
    ]


class TestParser:
    """Tests for the argument parser."""

    def test_run_options(self):
        """Test run options are parsed."""
        args = create_parser().parse_args(
            ["-vv", "run", "--tactic", "tlp_clear", "--invasive", "--output", "json"]
        )

        assert args.verbose == 2
        assert args.command == "run"
        assert args.tactic == "tlp_clear"
        assert args.invasive is True
        assert args.output == "json"

    def test_invasive_unset(self):
        """Test --invasive leaves the configured value alone when absent."""
        args = create_parser().parse_args(["run"])

        assert args.invasive is None


class TestFormatting:
    """Tests for report formatting."""

    def make_report(self) -> RunReport:
        report = RunReport(
            tactic_name="tlp_clear",
            target=RESOURCE_ID,
            started_at=datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
        )
        test_set = TestSetResult(
            control_id="CCC.C01",
            description="tls",
            docs_url="https://maintainer.com/docs/raids/ABS",
            passed=True,
            message="Default TLS version is TLS 1.2 or TLS 1.3",
        )
        test_set.tests["CCC_C01_TR01_T01"] = TestResult(
            description="tls",
            function="CCC_C01_TR01_T01",
            passed=True,
            message="TLS 1.2 is being used",
        )
        report.record("CCC_C01_TR01", test_set)
        report.completed_at = datetime(2025, 6, 1, 12, 1, tzinfo=timezone.utc)
        return report

    def test_format_table(self):
        """Test columns are padded to the widest cell."""
        table = format_table([{"id": "a", "result": "PASS"}, {"id": "long", "result": "F"}])

        assert table.splitlines() == [
            "id   | result",
            "-----+-------",
            "a    | PASS  ",
            "long | F     ",
        ]

    def test_format_table_empty(self):
        """Test an empty table."""
        assert format_table([]) == ""

    def test_table_report(self):
        """Test tests are listed under their test set."""
        output = format_report(self.make_report(), "table")
        lines = output.splitlines()

        assert lines[2].startswith("CCC_C01_TR01 ")
        assert "PASS" in lines[2]
        assert lines[3].startswith("  CCC_C01_TR01_T01")
        assert lines[-1] == "Tactic tlp_clear: 1 passed, 0 failed"

    def test_json_report(self):
        """Test the JSON report."""
        data = json.loads(format_report(self.make_report(), "json"))

        assert data["tactic_name"] == "tlp_clear"
        assert data["summary"]["passed"] == 1


class TestCommands:
    """Tests for the CLI commands."""

    def test_no_command(self, capsys):
        """Test help is printed without a command."""
        assert main([]) == 0
        assert "ccc-abs" in capsys.readouterr().out

    def test_version(self, capsys):
        """Test the version command."""
        assert main(["version"]) == 0
        assert capsys.readouterr().out.strip() == "CCC ABS version 0.1.0"

    def test_tactics(self, capsys):
        """Test tactics are listed with their requirements."""
        assert main(["tactics"]) == 0
        output = capsys.readouterr().out

        assert "tlp_red (47 test requirements)" in output
        assert "testing (1 test requirements)\n  CCC_C04_TR01" in output
        assert "  CCC_ObjStor_C02_TR01 (provisional)\n" in output
        assert "  CCC_C01_TR01\n" in output

    def test_run(self, bootstrapped, capsys):
        """Test a run prints the table report."""
        assert main(run_args("--tactic", "testing")) == 0
        output = capsys.readouterr().out

        assert "CCC_C04_TR01" in output
        assert "Tactic testing: 0 passed, 1 failed" in output
        config = bootstrapped[0]
        assert config.storage_account_resource_id == RESOURCE_ID.lower()
        assert config.allowed_regions == ["westeurope", "northeurope"]
        assert config.invasive is False

    def test_run_to_file(self, bootstrapped, capsys, tmp_path):
        """Test the report is written to a file."""
        path = tmp_path / "report.json"

        code = main(run_args("--tactic", "testing", "--output", "json", "-o", str(path)))

        assert code == 0
        assert f"Report written to: {path}" in capsys.readouterr().out
        data = json.loads(path.read_text())
        assert list(data["test_sets"]) == ["CCC_C04_TR01"]

    def test_run_output_file_not_writable(self, bootstrapped, capsys, tmp_path):
        """Test a report that cannot be written is an error."""
        path = tmp_path / "missing" / "report.json"

        code = main(run_args("--tactic", "testing", "-o", str(path)))

        assert code == 1
        assert f"Error: Failed to write report to {path}" in capsys.readouterr().out
        assert not path.exists()

    def test_run_unknown_tactic(self, bootstrapped, capsys):
        """Test an unknown tactic lists the valid ones."""
        assert main(run_args("--tactic", "tlp_blue")) == 1
        output = capsys.readouterr().out

        assert "Error: Unknown tactic 'tlp_blue'" in output
        assert "Valid tactics: testing, tlp_amber, tlp_clear, tlp_green, tlp_red" in output
        assert bootstrapped == []

    def test_run_initialization_error(self, clean_env, capsys):
        """Test an initialization error is reported."""

        def bootstrap(config):
            raise AuthenticationError("Failed to initialize Azure credentials: none")

        clean_env.setattr("ccc_abs.bootstrap.bootstrap", bootstrap)

        assert main(run_args()) == 1
        assert "Error: Failed to initialize Azure credentials: none" in capsys.readouterr().out

    def test_run_missing_configuration(self, clean_env, capsys):
        """Test a run without a target fails validation."""
        assert main(["run"]) == 1
        assert "storage account resource ID is not provided" in capsys.readouterr().out
