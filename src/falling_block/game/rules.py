from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_base: int = 100
    landing_bonus: int = 10
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def __post_init__(self) -> None:
        for name in ("line_clear_base", "landing_bonus", "interval_step_ms", "min_interval_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.lines_per_level <= 0:
            raise ValueError(f"lines_per_level must be positive, got {self.lines_per_level}")

    def score_for_lock(self, lines: int, level: int) -> int:
        # Linear in cleared rows, plus a flat bonus for every landed piece
        return lines * self.line_clear_base * level + self.landing_bonus

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def drop_interval_ms(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)
