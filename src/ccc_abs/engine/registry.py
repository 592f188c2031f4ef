"""
Tactic registry.

A tactic is a named, ordered list of test requirements. The registry is
built once at startup and read during a run.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from ccc_abs.engine.definitions import TRDefinition


class EngineError(Exception):
    """Base exception for engine errors."""

    pass


class UnknownTacticError(EngineError):
    """Raised when a tactic name is not registered."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = sorted(available)
        message = f"Unknown tactic: {name}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class TacticRegistry:
    """Mapping of tactic name to its ordered test requirements."""

    def __init__(self, tactics: Mapping[str, Iterable[TRDefinition]] | None = None):
        self._tactics: dict[str, tuple[TRDefinition, ...]] = {}
        for name, definitions in (tactics or {}).items():
            self.register(name, definitions)

    def register(self, name: str, definitions: Iterable[TRDefinition]) -> None:
        """
        Register a tactic.

        Raises:
            EngineError: If the tactic exists or lists a requirement twice
        """
        if name in self._tactics:
            raise EngineError(f"Tactic already registered: {name}")

        definitions = tuple(definitions)
        seen: set[str] = set()
        for definition in definitions:
            if definition.id in seen:
                raise EngineError(f"Tactic {name} lists {definition.id} more than once")
            seen.add(definition.id)

        self._tactics[name] = definitions

    def get(self, name: str) -> tuple[TRDefinition, ...]:
        """
        Get the test requirements of a tactic.

        Raises:
            UnknownTacticError: If the tactic is not registered
        """
        try:
            return self._tactics[name]
        except KeyError:
            raise UnknownTacticError(name, self._tactics.keys()) from None

    def names(self) -> list[str]:
        """List registered tactic names."""
        return sorted(self._tactics)

    def __contains__(self, name: object) -> bool:
        return name in self._tactics

    def __len__(self) -> int:
        return len(self._tactics)
