from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence


class Tier(str, Enum):
    ROOKIE = "rookie"
    RISER = "riser"
    CONTENDER = "contender"
    MIDCARDER = "midcarder"
    MAIN_EVENTER = "main_eventer"
    ICON = "icon"


class SegmentKind(str, Enum):
    TWO_SIDE = "two_side"
    MULTI_SIDE = "multi_side"
    HANDICAP = "handicap"
    PROMO = "promo"

    @property
    def is_match(self) -> bool:
        return self is not SegmentKind.PROMO


class RandomSource(Protocol):
    def rand(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, items: Sequence[Any]) -> Any: ...

    def shuffle(self, items: list[Any]) -> None: ...

    def spawn(self, substream_id: str) -> RandomSource: ...


@dataclass(frozen=True, slots=True)
class Competitor:
    competitor_id: str
    name: str
    tier: Tier
    fans: int
    bumps: int = 0
    active_injuries: int = 0


@dataclass(slots=True)
class Side:
    members: list[Competitor]
    name: str | None = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return " & ".join(m.name for m in self.members)

    @property
    def member_ids(self) -> list[str]:
        return [m.competitor_id for m in self.members]


@dataclass(slots=True)
class Outcome:
    winning_index: int
    winning_side: Side
    participants: list[Competitor]
    side_weights: list[int]

    @property
    def winners(self) -> list[Competitor]:
        return list(self.winning_side.members)

    @property
    def losers(self) -> list[Competitor]:
        winner_ids = set(self.winning_side.member_ids)
        return [c for c in self.participants if c.competitor_id not in winner_ids]


@dataclass(frozen=True, slots=True)
class RewardDelta:
    fans: int
    bumps: int


RewardMap = dict[str, RewardDelta]


@dataclass(frozen=True, slots=True)
class QualityRoll:
    d20: int
    extra_draws: tuple[int, ...]
    bonus: int


@dataclass(slots=True)
class SegmentResolution:
    segment_id: str
    kind: SegmentKind
    participants: list[Competitor]
    winners: list[Competitor]
    quality: QualityRoll
    rewards: RewardMap
    resolved_at: datetime
    outcome: Outcome | None = None

    @property
    def losers(self) -> list[Competitor]:
        if not self.kind.is_match:
            return []
        winner_ids = {w.competitor_id for w in self.winners}
        return [c for c in self.participants if c.competitor_id not in winner_ids]


@dataclass(slots=True)
class AppliedReward:
    competitor: Competitor
    delta: RewardDelta
    injury_triggered: bool = False


class ResultSink(Protocol):
    def record(self, resolution: SegmentResolution) -> None: ...


@dataclass(frozen=True, slots=True)
class WeightPolicy:
    fan_divisor: int = 5
    tier_bonuses: Mapping[Tier, int] = field(
        default_factory=lambda: {
            Tier.ROOKIE: 0,
            Tier.RISER: 2,
            Tier.CONTENDER: 4,
            Tier.MIDCARDER: 6,
            Tier.MAIN_EVENTER: 8,
            Tier.ICON: 10,
        }
    )
    bump_penalty: int = 1
    injury_penalty: int = 3
    floor: int = 1

    def validate(self) -> None:
        if self.fan_divisor <= 0:
            raise ValueError("fan_divisor must be positive")
        if self.floor <= 0:
            raise ValueError("weight floor must be positive")
        if self.bump_penalty < 0 or self.injury_penalty < 0:
            raise ValueError("health penalties must not be negative")
        missing = [t.value for t in Tier if t not in self.tier_bonuses]
        if missing:
            raise ValueError(f"tier_bonuses missing tiers: {', '.join(missing)}")
        bonuses = [self.tier_bonuses[t] for t in Tier]
        if any(lower >= higher for lower, higher in zip(bonuses, bonuses[1:])):
            raise ValueError("tier_bonuses must strictly increase with tier rank")


@dataclass(frozen=True, slots=True)
class RewardPolicy:
    fan_unit: int = 1_000
    base_bonus: int = 3
    winner_dice: int = 2
    loser_dice: int = 1
    die_faces: int = 6
    loser_bumps: int = 1
    multiplier: float = 1.0
    bump_injury_threshold: int = 3

    def validate(self) -> None:
        if self.fan_unit <= 0:
            raise ValueError("fan_unit must be positive")
        if self.die_faces <= 0:
            raise ValueError("die_faces must be positive")
        if self.winner_dice < 0 or self.loser_dice < 0 or self.base_bonus < 0:
            raise ValueError("reward dice counts and base bonus must not be negative")
        if self.loser_bumps < 0:
            raise ValueError("loser_bumps must not be negative")
        if self.multiplier <= 0:
            raise ValueError("reward multiplier must be positive")
        if self.bump_injury_threshold <= 0:
            raise ValueError("bump_injury_threshold must be positive")


@dataclass(slots=True)
class CalibrationRunRequest:
    side_weights: list[int]
    sample_count: int
    seed: int | None = None


@dataclass(slots=True)
class CalibrationRunResult:
    run_id: str
    side_weights: list[int]
    sample_count: int
    win_counts: list[int]
    observed_rates: list[float]
    expected_rates: list[float]
    max_deviation: float
    seed: int | None = None


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues

    @property
    def codes(self) -> list[str]:
        return [i.code for i in self.issues]
