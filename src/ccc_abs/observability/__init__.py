"""
Observability for the CCC assessment engine.
"""

from ccc_abs.observability.logging import (
    AssessmentLogger,
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "AssessmentLogger",
    "HumanReadableFormatter",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
