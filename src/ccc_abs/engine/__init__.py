"""
Execution engine for the CCC assessment engine.

This package contains the protocol primitives used to record tests,
the declarative test requirement interpreter, the tactic registry and
the runner that produces a RunReport.
"""

from ccc_abs.engine.definitions import (
    DOCS_URL,
    TestStep,
    TRDefinition,
    run_step,
    run_test_set,
)
from ccc_abs.engine.protocol import (
    INVASIVE_SKIP_MESSAGE,
    execute_invasive_test,
    execute_test,
    set_result_failure,
    test_set_result_setter,
)
from ccc_abs.engine.registry import EngineError, TacticRegistry, UnknownTacticError
from ccc_abs.engine.runner import AssessmentRunner

__all__ = [
    # Definitions
    "DOCS_URL",
    "TestStep",
    "TRDefinition",
    "run_step",
    "run_test_set",
    # Protocol
    "INVASIVE_SKIP_MESSAGE",
    "execute_invasive_test",
    "execute_test",
    "set_result_failure",
    "test_set_result_setter",
    # Registry and runner
    "EngineError",
    "TacticRegistry",
    "UnknownTacticError",
    "AssessmentRunner",
]
