"""
Types and constants for the Forager policy.

Cell codes, tunables, behavior modes and adversary records.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, fields
from enum import Enum
from typing import Mapping, Optional


class Mode(Enum):
    """Behaviors in the order they are tried each tick."""

    PURSUE = "pursue"  # Chase a vulnerable adversary
    EVADE = "evade"  # Head for a safety resource when threatened
    FORAGE = "forage"  # Collect ordinary resources
    ESCAPE = "escape"  # Step away from threats
    RANDOM = "random"  # Last resort


@dataclass(frozen=True)
class CellCodes:
    """Integer codes of the distinguished cell types, resolved once at startup."""

    obstacle: int = 1
    resource: int = 2
    safety_resource: int = 3
    empty: int = 0

    @classmethod
    def from_mapping(cls, codes: Mapping[str, int]) -> CellCodes:
        """Resolve codes from a host mapping such as ``{"obstacle": 0x0000FF, ...}``.

        Missing names keep their defaults; unknown names raise KeyError.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(codes) - known
        if unknown:
            raise KeyError(f"unknown cell code names: {sorted(unknown)}")
        return cls(**{name: int(value) for name, value in codes.items()})


@dataclass(frozen=True)
class PolicyConfig:
    """Tunable heuristics for the decision policy."""

    # Danger radius around threats; corridors close faster than open space
    danger_radius_open: int = 2
    danger_radius_corridor: int = 3
    # Seek a safety resource when the nearest threat is this close
    threat_trigger_radius: int = 4
    # Guarded BFS gives up after exploring factor * W * H cells
    explore_cap_factor: int = 2
    use_path_cache: bool = True
    # Topology applied when the host hands over a raw matrix
    cyclic: bool = True

    @classmethod
    def from_kwargs(cls, **kwargs: object) -> PolicyConfig:
        """Build from URI-style parameters, ignoring names that are not tunables.

        Values may arrive as strings and are coerced to the field's type.
        """
        field_types = {f.name: f.type for f in fields(cls)}
        values = {}
        for name, value in kwargs.items():
            if name not in field_types:
                continue
            values[name] = _as_flag(value) if field_types[name] == "bool" else int(value)  # type: ignore[call-overload]
        return cls(**values)


def _as_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class Adversary:
    """One adversary as reported by the host for the current tick."""

    position: tuple[int, int]
    vulnerable: bool = False
    vulnerable_ticks: int = 0

    def __post_init__(self) -> None:
        pos = tuple(self.position)
        if len(pos) != 2:
            raise TypeError(f"adversary position must be an (x, y) pair, got {self.position!r}")
        # operator.index rejects floats and strings instead of coercing them
        object.__setattr__(self, "position", (operator.index(pos[0]), operator.index(pos[1])))

    def is_vulnerable(self) -> bool:
        return self.vulnerable or self.vulnerable_ticks > 0


# Debug flag (module-wide); policies also take a per-instance debug flag
DEBUG = False


@dataclass
class DebugInfo:
    """Structured debug info about the agent's current intent."""

    mode: str = "idle"  # Behavior that produced the move
    goal: str = ""  # Goal description
    target_pos: Optional[tuple[int, int]] = None
    signal: str = ""  # Event signal (e.g. "legalized_move")

    def format(self, direction: str) -> str:
        """Format as mode:goal:target:direction[:signal]."""
        target = str(self.target_pos) if self.target_pos else "-"
        base = f"{self.mode}:{self.goal or '-'}:{target}:{direction}"
        if self.signal:
            return f"{base}:{self.signal}"
        return base
