from __future__ import annotations

import logging
from typing import Sequence

from ringside.contracts import Competitor, Side, Tier, ValidationError, ValidationIssue, WeightPolicy
from ringside.core.policy import default_weight_policy

logger = logging.getLogger(__name__)


def weight(
    tier: Tier,
    fans: int,
    *,
    bumps: int = 0,
    active_injuries: int = 0,
    policy: WeightPolicy | None = None,
) -> int:
    """Outcome weight for one competitor.

    Fan count dominates (``fans // fan_divisor``); the tier adds a fixed,
    strictly increasing bonus and bumps/injuries subtract a health penalty.
    The result never drops below ``policy.floor``.
    """
    if policy is None:
        policy = default_weight_policy()
    else:
        policy.validate()
    if fans < 0:
        raise ValidationError(
            [
                ValidationIssue(
                    code="NEGATIVE_FANS",
                    severity="blocking",
                    field_path="fans",
                    entity_id=tier.value,
                    message=f"fan count must not be negative, got {fans}",
                )
            ]
        )
    fan_weight = fans // policy.fan_divisor
    tier_bonus = policy.tier_bonuses[tier]
    health_penalty = bumps * policy.bump_penalty + active_injuries * policy.injury_penalty
    return max(policy.floor, fan_weight + tier_bonus - health_penalty)


def competitor_weight(competitor: Competitor, policy: WeightPolicy | None = None) -> int:
    total = weight(
        competitor.tier,
        competitor.fans,
        bumps=competitor.bumps,
        active_injuries=competitor.active_injuries,
        policy=policy,
    )
    logger.debug(
        "Calculated weight for %s: %d (fans: %d, tier: %s, bumps: %d, injuries: %d)",
        competitor.name,
        total,
        competitor.fans,
        competitor.tier.value,
        competitor.bumps,
        competitor.active_injuries,
    )
    return total


def aggregate(side: Side, policy: WeightPolicy | None = None) -> int:
    if not side.members:
        raise ValidationError(
            [
                ValidationIssue(
                    code="EMPTY_SIDE",
                    severity="blocking",
                    field_path="side.members",
                    entity_id=side.name or "side",
                    message="cannot weigh a side with no competitors",
                )
            ]
        )
    return sum(competitor_weight(member, policy) for member in side.members)


def side_weights(sides: Sequence[Side], policy: WeightPolicy | None = None) -> list[int]:
    return [aggregate(side, policy) for side in sides]


def win_probabilities(weights: Sequence[float]) -> list[float]:
    total = sum(weights)
    if total <= 0:
        raise ValueError("total side weight must be positive")
    return [w / total for w in weights]
