"""Tunable constants for a game session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ScoringRules:
    line_clear: int = 100
    recipe_item: int = 500
    powerup_bonus: int = 1000
    dirt: int = 10
    monster: int = 200
    food: int = 50
    segment: int = 100
    obstacle: int = 0
    lines_per_level: int = 10
    items_per_level: int = 5

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return self.line_clear * lines * level


@dataclass(frozen=True)
class ArcadeConfig:
    random_seed: Optional[int] = None

    # Tick timing in milliseconds
    base_tick_ms: int = 800
    tick_step_ms: int = 100
    min_tick_ms: int = 100
    tunneling_tick_ms: int = 200

    # Tunneling field generation; chances are cumulative over one draw
    tunnel_open_rows: int = 4
    rock_chance: float = 0.05
    pooka_chance: float = 0.03
    fygar_chance: float = 0.02
    monster_move_chance: float = 0.2

    # Defense field generation
    defense_obstacles: int = 20
    defense_segments: int = 8

    powerup_choices: int = 10
    master_builder_pieces: int = 5
    event_queue_size: int = 256

    scoring: ScoringRules = field(default_factory=ScoringRules)
