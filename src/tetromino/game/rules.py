from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    lines_per_level: int = 10
    base_fall_interval: float = 0.27
    fall_interval_step: float = 0.02
    # Floor for the fall interval; the linear formula reaches zero around level 14.
    min_fall_interval: float = 0.05

    def score_for_lines(self, lines: int) -> int:
        # One point per line, no bonus for clearing several at once.
        return max(0, lines)

    def level_for_score(self, score: int) -> int:
        return score // self.lines_per_level + 1

    def fall_interval(self, level: int) -> float:
        return max(self.min_fall_interval, self.base_fall_interval - level * self.fall_interval_step)
