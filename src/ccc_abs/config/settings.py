"""
Assessment configuration for the CCC assessment engine.

An assessment is configured with the target storage account, the list
of regions the organization allows, and whether invasive tests may
mutate the account. Settings come from a JSON or YAML file, from
CCC_ABS_* environment variables, or from the command line.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from ccc_abs.cloud.base import ConfigurationError

DEFAULT_TACTIC = "tlp_red"


@dataclass
class LogPollingSettings:
    """
    Timing of the log ingestion poller.

    The poller waits ``minimum_ingestion_seconds - polling_delay_seconds``,
    then queries every ``polling_delay_seconds`` until
    ``maximum_ingestion_seconds`` have elapsed.
    """

    minimum_ingestion_seconds: float = 90.0
    maximum_ingestion_seconds: float = 300.0
    polling_delay_seconds: float = 10.0

    @property
    def initial_wait_seconds(self) -> float:
        """Wait before the first query."""
        return max(self.minimum_ingestion_seconds - self.polling_delay_seconds, 0.0)

    @property
    def retries(self) -> int:
        """Number of queries made before giving up, at least one."""
        if self.polling_delay_seconds <= 0:
            return 1
        window = self.maximum_ingestion_seconds - self.minimum_ingestion_seconds
        return max(int(window / self.polling_delay_seconds), 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "minimum_ingestion_seconds": self.minimum_ingestion_seconds,
            "maximum_ingestion_seconds": self.maximum_ingestion_seconds,
            "polling_delay_seconds": self.polling_delay_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogPollingSettings:
        """Create from dictionary."""
        return cls(
            minimum_ingestion_seconds=float(data.get("minimum_ingestion_seconds", 90.0)),
            maximum_ingestion_seconds=float(data.get("maximum_ingestion_seconds", 300.0)),
            polling_delay_seconds=float(data.get("polling_delay_seconds", 10.0)),
        )


def _first(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in data."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_regions(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [r.strip() for r in value.split(",") if r.strip()]
    return [str(r) for r in value]


@dataclass
class AssessmentConfig:
    """
    Configuration of one assessment run.

    Attributes:
        storage_account_resource_id: ARM id of the target account, lowercased
        allowed_regions: Regions the organization allows, first is the
            known-good deployment target
        invasive: Whether tests that mutate the account may run
        tactic: Name of the tactic to run
        output: Report format (json, table)
        polling: Log ingestion poller timing
    """

    storage_account_resource_id: str = ""
    allowed_regions: list[str] = field(default_factory=list)
    invasive: bool = False
    tactic: str = DEFAULT_TACTIC
    output: str = "table"
    polling: LogPollingSettings = field(default_factory=LogPollingSettings)

    def __post_init__(self) -> None:
        self.storage_account_resource_id = self.storage_account_resource_id.lower()

    def validate(self) -> None:
        """
        Check required settings are present.

        Raises:
            ConfigurationError: If the resource id or allowed regions are missing
        """
        if not self.storage_account_resource_id:
            raise ConfigurationError(
                "required variable storage account resource ID is not provided"
            )
        if not self.allowed_regions:
            raise ConfigurationError("required variable allowed regions is not provided")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "storage_account_resource_id": self.storage_account_resource_id,
            "allowed_regions": list(self.allowed_regions),
            "invasive": self.invasive,
            "tactic": self.tactic,
            "output": self.output,
            "polling": self.polling.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssessmentConfig:
        """
        Create from dictionary.

        Accepts the flat host keys (``storageaccountresourceid``,
        ``allowedregions``) as well as snake_case keys.
        """
        return cls(
            storage_account_resource_id=str(
                _first(data, "storage_account_resource_id", "storageaccountresourceid", default="")
            ),
            allowed_regions=_parse_regions(
                _first(data, "allowed_regions", "allowedregions")
            ),
            invasive=_parse_bool(data.get("invasive", False)),
            tactic=data.get("tactic", DEFAULT_TACTIC),
            output=data.get("output", "table"),
            polling=LogPollingSettings.from_dict(data.get("polling") or {}),
        )

    @classmethod
    def from_json(cls, json_str: str) -> AssessmentConfig:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_file(cls, path: str) -> AssessmentConfig:
        """
        Load configuration from a JSON or YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = os.path.expanduser(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.endswith(".json"):
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration from {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")
        return cls.from_dict(data)


def load_config_from_env() -> AssessmentConfig:
    """
    Load configuration from environment variables.

    Environment variables:
        CCC_ABS_CONFIG_FILE: Path to configuration file
        CCC_ABS_STORAGE_ACCOUNT_RESOURCE_ID: Target storage account
        CCC_ABS_ALLOWED_REGIONS: Comma-separated list of allowed regions
        CCC_ABS_INVASIVE: Enable invasive tests (true/false)
        CCC_ABS_TACTIC: Tactic to run

    Returns:
        AssessmentConfig instance
    """
    config_file = os.getenv("CCC_ABS_CONFIG_FILE")
    if config_file and os.path.exists(config_file):
        config = AssessmentConfig.from_file(config_file)
    else:
        config = AssessmentConfig()

    resource_id = os.getenv("CCC_ABS_STORAGE_ACCOUNT_RESOURCE_ID")
    if resource_id:
        config.storage_account_resource_id = resource_id.lower()

    regions = os.getenv("CCC_ABS_ALLOWED_REGIONS")
    if regions:
        config.allowed_regions = _parse_regions(regions)

    invasive = os.getenv("CCC_ABS_INVASIVE")
    if invasive is not None:
        config.invasive = _parse_bool(invasive)

    tactic = os.getenv("CCC_ABS_TACTIC")
    if tactic:
        config.tactic = tactic

    return config
