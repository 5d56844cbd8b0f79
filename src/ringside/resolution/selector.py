from __future__ import annotations

import logging
from typing import Sequence

from ringside.contracts import Outcome, RandomSource, Side, WeightPolicy
from ringside.resolution.validation import SegmentValidator
from ringside.resolution.weights import side_weights, win_probabilities

logger = logging.getLogger(__name__)


def select_index(weights: Sequence[float], draw: float) -> int:
    """Map one uniform draw in [0, 1) onto cumulative side weights.

    Side ``i`` owns the half-open interval ``[b_{i-1}, b_i)`` of
    ``[0, total)``, so a point that lands exactly on a boundary belongs to the
    side above it.
    """
    SegmentValidator().validate_weights(weights)
    if not 0.0 <= draw < 1.0:
        raise ValueError(f"draw must be in [0, 1), got {draw}")
    point = draw * sum(weights)
    cumulative = 0.0
    for idx, w in enumerate(weights[:-1]):
        cumulative += w
        if point < cumulative:
            return idx
    return len(weights) - 1


class OutcomeSelector:
    """Weighted winner selection over two or more sides."""

    def __init__(self, policy: WeightPolicy | None = None, validator: SegmentValidator | None = None) -> None:
        if policy is not None:
            policy.validate()
        self._policy = policy
        self._validator = validator or SegmentValidator()

    def select(self, sides: Sequence[Side], random_source: RandomSource) -> Outcome:
        self._validator.validate_sides(sides)
        weights = side_weights(sides, self._policy)
        self._validator.validate_weights(weights)

        probabilities = win_probabilities(weights)
        logger.debug(
            "Side win probabilities: %s",
            ", ".join(
                f"{side.display_name}: {p * 100:.1f}% (weight {w})"
                for side, p, w in zip(sides, probabilities, weights)
            ),
        )

        draw = random_source.rand()
        index = select_index(weights, draw)
        winning_side = sides[index]
        participants = [member for side in sides for member in side.members]
        logger.info(
            "Resolved %d-side segment: %s wins (%.1f%% probability, draw %.4f)",
            len(sides),
            winning_side.display_name,
            probabilities[index] * 100,
            draw,
        )
        return Outcome(
            winning_index=index,
            winning_side=winning_side,
            participants=participants,
            side_weights=weights,
        )


def resolve_sides(sides: Sequence[Side], random_source: RandomSource, policy: WeightPolicy | None = None) -> int:
    return OutcomeSelector(policy).select(sides, random_source).winning_index
