"""
Configuration for the CCC assessment engine.
"""

from ccc_abs.config.settings import (
    DEFAULT_TACTIC,
    AssessmentConfig,
    LogPollingSettings,
    load_config_from_env,
)

__all__ = [
    "DEFAULT_TACTIC",
    "AssessmentConfig",
    "LogPollingSettings",
    "load_config_from_env",
]
