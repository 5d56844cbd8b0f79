from __future__ import annotations

import logging
from dataclasses import dataclass

from ringside.contracts import QualityRoll, RandomSource

logger = logging.getLogger(__name__)

D20_FACES = 20


@dataclass(frozen=True, slots=True)
class QualityRow:
    low: int
    high: int
    draw_count: int
    die_faces: int

    def covers(self, roll: int) -> bool:
        return self.low <= roll <= self.high


# Natural 1 fails outright; 17+ escalates into extra dice.
QUALITY_TABLE: tuple[QualityRow, ...] = (
    QualityRow(low=1, high=1, draw_count=0, die_faces=0),
    QualityRow(low=2, high=3, draw_count=1, die_faces=3),
    QualityRow(low=4, high=16, draw_count=1, die_faces=6),
    QualityRow(low=17, high=19, draw_count=2, die_faces=6),
    QualityRow(low=20, high=20, draw_count=3, die_faces=6),
)


def row_for(roll: int, table: tuple[QualityRow, ...] = QUALITY_TABLE) -> QualityRow:
    for row in table:
        if row.covers(roll):
            return row
    raise ValueError(f"d20 roll must be within 1..{D20_FACES}, got {roll}")


def compute_bonus(d20_roll: int, random_source: RandomSource) -> QualityRoll:
    """Bonus for an already-drawn d20 roll; consumes exactly the row's draw count."""
    row = row_for(d20_roll)
    draws = tuple(random_source.randint(1, row.die_faces) for _ in range(row.draw_count))
    bonus = sum(draws)
    logger.debug("Quality roll d20=%d -> %dd%d %s = bonus %d", d20_roll, row.draw_count, row.die_faces, list(draws), bonus)
    return QualityRoll(d20=d20_roll, extra_draws=draws, bonus=bonus)


def roll_quality(random_source: RandomSource) -> QualityRoll:
    return compute_bonus(random_source.randint(1, D20_FACES), random_source)


def max_bonus(table: tuple[QualityRow, ...] = QUALITY_TABLE) -> int:
    return max(row.draw_count * row.die_faces for row in table)
