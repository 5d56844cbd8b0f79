from __future__ import annotations

import logging
from typing import Sequence

from ringside.contracts import (
    Competitor,
    Outcome,
    RandomSource,
    ResultSink,
    RewardMap,
    RewardPolicy,
    SegmentKind,
    SegmentResolution,
    Side,
    WeightPolicy,
)
from ringside.core import ClassificationError, new_segment_id, now_utc
from ringside.core.policy import segment_kind_for_label
from ringside.resolution.quality import roll_quality
from ringside.resolution.rewards import RewardCalculator
from ringside.resolution.selector import OutcomeSelector
from ringside.resolution.validation import SegmentValidator

logger = logging.getLogger(__name__)


def classify_segment(label: SegmentKind | str, sides: Sequence[Side] | None = None) -> SegmentKind:
    """Resolve a booking label (or kind) to a SegmentKind.

    Any match kind is refined by side shape when sides are known: three or
    more sides is multi-side, two sides of different sizes is a handicap.
    """
    if isinstance(label, SegmentKind):
        kind = label
    else:
        normalized = label.strip().lower()
        try:
            kind = SegmentKind(normalized)
        except ValueError:
            found = segment_kind_for_label(normalized)
            if found is None:
                raise ClassificationError(label) from None
            kind = found

    if sides is None or not kind.is_match:
        return kind
    if len(sides) >= 3:
        return SegmentKind.MULTI_SIDE
    if len(sides) == 2 and len(sides[0].members) != len(sides[1].members):
        return SegmentKind.HANDICAP
    return SegmentKind.TWO_SIDE


class SegmentAdjudicator:
    """Runs the quality roll and reward rules for one segment.

    Every call takes its own random source; the adjudicator keeps no draw
    state between segments. Draw order is fixed: winner selection (when
    resolving sides), the d20, the bonus dice, then reward dice for winners
    followed by losers.
    """

    def __init__(
        self,
        *,
        weight_policy: WeightPolicy | None = None,
        reward_policy: RewardPolicy | None = None,
        sink: ResultSink | None = None,
        validator: SegmentValidator | None = None,
    ) -> None:
        self._validator = validator or SegmentValidator()
        self._selector = OutcomeSelector(weight_policy, self._validator)
        self._rewards = RewardCalculator(reward_policy)
        self._sink = sink

    def adjudicate(
        self,
        classification: SegmentKind | str,
        participants: Sequence[Competitor],
        winners: Sequence[Competitor] | None = None,
        *,
        random_source: RandomSource,
        segment_id: str | None = None,
        outcome: Outcome | None = None,
    ) -> SegmentResolution:
        kind = classify_segment(classification)
        self._validator.validate_participants(kind, participants, winners)

        if kind.is_match:
            winner_ids = {w.competitor_id for w in winners or []}
            match_winners = [p for p in participants if p.competitor_id in winner_ids]
            match_losers = [p for p in participants if p.competitor_id not in winner_ids]
        else:
            match_winners, match_losers = [], list(participants)

        quality = roll_quality(random_source)
        rewards = self._rewards.compute(kind, match_winners, match_losers, quality.bonus, random_source)

        resolution = SegmentResolution(
            segment_id=segment_id or new_segment_id(),
            kind=kind,
            participants=list(participants),
            winners=match_winners,
            quality=quality,
            rewards=rewards,
            resolved_at=now_utc(),
            outcome=outcome,
        )
        logger.info(
            "Adjudicated %s segment %s: d20=%d bonus=%d, %d participant(s) rewarded",
            kind.value,
            resolution.segment_id,
            quality.d20,
            quality.bonus,
            len(rewards),
        )
        if self._sink is not None:
            self._sink.record(resolution)
        return resolution

    def resolve_segment(
        self,
        classification: SegmentKind | str,
        sides: Sequence[Side],
        *,
        random_source: RandomSource,
        segment_id: str | None = None,
    ) -> SegmentResolution:
        """Pick a winner by weight, then adjudicate the result.

        Promos skip winner selection entirely and share rewards across every
        member of every side.
        """
        kind = classify_segment(classification, sides)
        participants = [member for side in sides for member in side.members]
        if not kind.is_match:
            return self.adjudicate(kind, participants, random_source=random_source, segment_id=segment_id)

        outcome = self._selector.select(sides, random_source)
        return self.adjudicate(
            kind,
            outcome.participants,
            outcome.winners,
            random_source=random_source,
            segment_id=segment_id,
            outcome=outcome,
        )


def adjudicate(
    classification: SegmentKind | str,
    participants: Sequence[Competitor],
    winners: Sequence[Competitor] | None = None,
    *,
    random_source: RandomSource,
    reward_policy: RewardPolicy | None = None,
) -> RewardMap:
    adjudicator = SegmentAdjudicator(reward_policy=reward_policy)
    return adjudicator.adjudicate(classification, participants, winners, random_source=random_source).rewards
