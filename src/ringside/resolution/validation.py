from __future__ import annotations

from typing import Sequence

from ringside.contracts import Competitor, SegmentKind, Side, ValidationError, ValidationIssue, ValidationResult


class SegmentValidator:
    """Precondition checks run before any draw is taken from a random source."""

    def validate_sides(self, sides: Sequence[Side]) -> ValidationResult:
        issues: list[ValidationIssue] = []
        if len(sides) < 2:
            issues.append(
                ValidationIssue(
                    code="TOO_FEW_SIDES",
                    severity="blocking",
                    field_path="sides",
                    entity_id="segment",
                    message=f"at least two sides are required, got {len(sides)}",
                )
            )
        seen: dict[str, int] = {}
        for idx, side in enumerate(sides):
            if not side.members:
                issues.append(
                    ValidationIssue(
                        code="EMPTY_SIDE",
                        severity="blocking",
                        field_path=f"sides[{idx}].members",
                        entity_id=side.name or f"side_{idx}",
                        message="side must have at least one competitor",
                    )
                )
            for member in side.members:
                if member.competitor_id in seen and seen[member.competitor_id] != idx:
                    issues.append(
                        ValidationIssue(
                            code="DUPLICATE_COMPETITOR",
                            severity="blocking",
                            field_path=f"sides[{idx}].members",
                            entity_id=member.competitor_id,
                            message=f"competitor already assigned to side {seen[member.competitor_id]}",
                        )
                    )
                seen.setdefault(member.competitor_id, idx)
            issues.extend(self._validate_competitors(side.members, f"sides[{idx}].members"))
        return self._finalize(issues)

    def validate_weights(self, weights: Sequence[float]) -> ValidationResult:
        issues: list[ValidationIssue] = []
        if len(weights) < 2:
            issues.append(
                ValidationIssue(
                    code="TOO_FEW_SIDES",
                    severity="blocking",
                    field_path="weights",
                    entity_id="segment",
                    message=f"at least two side weights are required, got {len(weights)}",
                )
            )
        for idx, weight in enumerate(weights):
            if not weight > 0:
                issues.append(
                    ValidationIssue(
                        code="NON_POSITIVE_WEIGHT",
                        severity="blocking",
                        field_path=f"weights[{idx}]",
                        entity_id=f"side_{idx}",
                        message=f"side weight must be positive, got {weight}",
                    )
                )
        return self._finalize(issues)

    def validate_participants(
        self,
        kind: SegmentKind,
        participants: Sequence[Competitor],
        winners: Sequence[Competitor] | None,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []
        if not participants:
            issues.append(
                ValidationIssue(
                    code="NO_PARTICIPANTS",
                    severity="blocking",
                    field_path="participants",
                    entity_id="segment",
                    message="segment must have at least one participant",
                )
            )
        ids = [p.competitor_id for p in participants]
        for dup in sorted({i for i in ids if ids.count(i) > 1}):
            issues.append(
                ValidationIssue(
                    code="DUPLICATE_COMPETITOR",
                    severity="blocking",
                    field_path="participants",
                    entity_id=dup,
                    message="competitor listed more than once",
                )
            )
        issues.extend(self._validate_competitors(participants, "participants"))

        winners = list(winners or [])
        if kind.is_match:
            if not winners:
                issues.append(
                    ValidationIssue(
                        code="MISSING_WINNERS",
                        severity="blocking",
                        field_path="winners",
                        entity_id="segment",
                        message="match adjudication requires at least one winner",
                    )
                )
            for winner in winners:
                if winner.competitor_id not in ids:
                    issues.append(
                        ValidationIssue(
                            code="WINNER_NOT_PARTICIPANT",
                            severity="blocking",
                            field_path="winners",
                            entity_id=winner.competitor_id,
                            message="winner is not a participant of the segment",
                        )
                    )
            if participants and winners and {w.competitor_id for w in winners} >= set(ids):
                issues.append(
                    ValidationIssue(
                        code="NO_LOSERS",
                        severity="blocking",
                        field_path="winners",
                        entity_id="segment",
                        message="match adjudication requires at least one loser",
                    )
                )
        elif winners:
            issues.append(
                ValidationIssue(
                    code="PROMO_WINNERS_IGNORED",
                    severity="warning",
                    field_path="winners",
                    entity_id="segment",
                    message="promo segments share rewards equally; winners are ignored",
                )
            )
        return self._finalize(issues)

    def _validate_competitors(self, competitors: Sequence[Competitor], field_path: str) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for competitor in competitors:
            if competitor.fans < 0:
                issues.append(
                    ValidationIssue(
                        code="NEGATIVE_FANS",
                        severity="blocking",
                        field_path=f"{field_path}.fans",
                        entity_id=competitor.competitor_id,
                        message=f"fan count must not be negative, got {competitor.fans}",
                    )
                )
            if competitor.bumps < 0 or competitor.active_injuries < 0:
                issues.append(
                    ValidationIssue(
                        code="NEGATIVE_HEALTH_COUNTER",
                        severity="blocking",
                        field_path=f"{field_path}.bumps",
                        entity_id=competitor.competitor_id,
                        message="bumps and active injuries must not be negative",
                    )
                )
        return issues

    def _finalize(self, issues: list[ValidationIssue]) -> ValidationResult:
        ordered = sorted(issues, key=lambda x: (x.severity, x.code, x.entity_id, x.field_path))
        blocking = [i for i in ordered if i.severity == "blocking"]
        if blocking:
            raise ValidationError(blocking)
        return ValidationResult(ok=True, issues=ordered)
