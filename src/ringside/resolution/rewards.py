from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ringside.contracts import (
    AppliedReward,
    Competitor,
    RandomSource,
    RewardDelta,
    RewardMap,
    RewardPolicy,
    SegmentKind,
)
from ringside.core.policy import default_reward_policy

logger = logging.getLogger(__name__)


class RewardCalculator:
    """Turns a quality bonus and a winner/loser split into fan and bump deltas."""

    def __init__(self, policy: RewardPolicy | None = None) -> None:
        self._policy = policy or default_reward_policy()
        self._policy.validate()

    @property
    def policy(self) -> RewardPolicy:
        return self._policy

    def compute(
        self,
        kind: SegmentKind,
        winners: Sequence[Competitor],
        losers: Sequence[Competitor],
        bonus: int,
        random_source: RandomSource,
    ) -> RewardMap:
        if bonus < 0:
            raise ValueError(f"quality bonus must not be negative, got {bonus}")
        if kind.is_match:
            return self.compute_match(winners, losers, bonus, random_source)
        return self.compute_promo([*winners, *losers], bonus)

    def compute_match(
        self,
        winners: Sequence[Competitor],
        losers: Sequence[Competitor],
        bonus: int,
        random_source: RandomSource,
    ) -> RewardMap:
        policy = self._policy
        rewards: RewardMap = {}
        # Winners roll first, in listed order, then losers.
        for winner in winners:
            dice = self._roll(policy.winner_dice, random_source)
            fans = self._scaled((dice + policy.base_bonus + bonus) * policy.fan_unit)
            rewards[winner.competitor_id] = RewardDelta(fans=fans, bumps=0)
            logger.debug("Awarded %d fans to winner %s", fans, winner.name)
        for loser in losers:
            dice = self._roll(policy.loser_dice, random_source)
            fans = self._scaled((dice + policy.base_bonus + bonus) * policy.fan_unit)
            rewards[loser.competitor_id] = RewardDelta(fans=fans, bumps=policy.loser_bumps)
            logger.debug("Awarded %d fans and %d bump(s) to loser %s", fans, policy.loser_bumps, loser.name)
        return rewards

    def promo_award(self, bonus: int) -> int:
        return self._scaled(bonus * self._policy.fan_unit)

    def compute_promo(self, participants: Sequence[Competitor], bonus: int) -> RewardMap:
        fans = self.promo_award(bonus)
        for participant in participants:
            logger.debug("Awarded %d fans to %s during promo", fans, participant.name)
        return {p.competitor_id: RewardDelta(fans=fans, bumps=0) for p in participants}

    def _roll(self, count: int, random_source: RandomSource) -> int:
        return sum(random_source.randint(1, self._policy.die_faces) for _ in range(count))

    def _scaled(self, base: int) -> int:
        return int(base * self._policy.multiplier)


def apply_rewards(
    competitors: Sequence[Competitor],
    rewards: RewardMap,
    policy: RewardPolicy | None = None,
) -> list[AppliedReward]:
    """Return updated copies of the rewarded competitors; inputs are left untouched.

    A bump that reaches ``bump_injury_threshold`` resets the counter and is
    flagged so the caller can open an injury.
    """
    policy = policy or default_reward_policy()
    applied: list[AppliedReward] = []
    for competitor in competitors:
        delta = rewards.get(competitor.competitor_id)
        if delta is None:
            continue
        fans = max(0, competitor.fans + delta.fans)
        bumps = competitor.bumps + delta.bumps
        injury = delta.bumps > 0 and bumps >= policy.bump_injury_threshold
        if injury:
            bumps = 0
            logger.info("%s reached %d bumps; injury triggered", competitor.name, policy.bump_injury_threshold)
        applied.append(
            AppliedReward(
                competitor=replace(competitor, fans=fans, bumps=bumps),
                delta=delta,
                injury_triggered=injury,
            )
        )
    return applied
