from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    # base bonus for clearing 1, 2, 3 or 4 rows at once
    row_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)
    level_unit: int = 10
    base_speed_ms: int = 1000
    speed_numerator: int = 4
    speed_denominator: int = 5

    def score_for_rows(self, rows: int, level: int) -> int:
        if rows <= 0:
            return 0
        base = self.row_scores[min(rows, len(self.row_scores)) - 1]
        return level * base + base

    def level_for_lines(self, line_count: int) -> int:
        return line_count // self.level_unit

    def speed_up(self, tick_speed: int) -> int:
        return (tick_speed * self.speed_numerator) // self.speed_denominator

    def initial_tick_speed(self, level: int) -> int:
        tick_speed = self.base_speed_ms
        for _ in range(level):
            tick_speed = self.speed_up(tick_speed)
        return tick_speed
