"""Structured configuration for a game session."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


def _default_colors():
    return {
        "background": 0x1099BB,
        "snake": 0x00FF00,
        "food": 0xFF0000,
        "wall": 0x000000,
        "portal": 0x0000FF,
    }


def _default_start_body():
    return [(10, 10), (10, 11), (10, 12)]


@dataclass
class GameConfig:
    grid_size: int = 20
    cell_size: int = 20
    initial_interval_ms: float = 150.0
    min_interval_ms: float = 50.0
    speed_factor: float = 0.9
    food_points: int = 10
    start_body: List[Tuple[int, int]] = field(default_factory=_default_start_body)
    colors: Dict[str, int] = field(default_factory=_default_colors)

    def __post_init__(self) -> None:
        timing = (self.initial_interval_ms, self.min_interval_ms, self.speed_factor)
        if not all(math.isfinite(value) for value in timing):
            raise ValueError("intervals and speed_factor must be finite numbers")
        if self.grid_size <= 0 or self.cell_size <= 0:
            raise ValueError("grid_size and cell_size must be positive")
        if self.min_interval_ms <= 0 or self.initial_interval_ms < self.min_interval_ms:
            raise ValueError("initial_interval_ms must be >= min_interval_ms > 0")
        if not 0 < self.speed_factor <= 1:
            raise ValueError("speed_factor must be in (0, 1]")
        if len(self.start_body) < 1:
            raise ValueError("start_body needs at least one segment")

    @property
    def viewport(self) -> int:
        """Width and height of the drawing surface in pixels."""
        return self.grid_size * self.cell_size

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        defaults = cls()
        return cls(
            grid_size=int(data.get("grid_size", defaults.grid_size)),
            cell_size=int(data.get("cell_size", defaults.cell_size)),
            initial_interval_ms=float(data.get("initial_interval_ms", defaults.initial_interval_ms)),
            min_interval_ms=float(data.get("min_interval_ms", defaults.min_interval_ms)),
            speed_factor=float(data.get("speed_factor", defaults.speed_factor)),
            food_points=int(data.get("food_points", defaults.food_points)),
            start_body=[tuple(p) for p in data.get("start_body", defaults.start_body)],
            colors={**_default_colors(), **data.get("colors", {})},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid_size": self.grid_size,
            "cell_size": self.cell_size,
            "initial_interval_ms": self.initial_interval_ms,
            "min_interval_ms": self.min_interval_ms,
            "speed_factor": self.speed_factor,
            "food_points": self.food_points,
            "start_body": [list(p) for p in self.start_body],
            "colors": dict(self.colors),
        }
