from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping

from ringside.contracts import RewardPolicy, SegmentKind, Tier, WeightPolicy
from ringside.core.errors import PolicyError

MATCH = "match"
PROMO = "promo"

# Booking labels as they appear on segment records, lower-cased, with the
# kind assumed when no side grouping is known yet.
SEGMENT_TYPE_KINDS: dict[str, SegmentKind] = {
    "promo": SegmentKind.PROMO,
    "one on one": SegmentKind.TWO_SIDE,
    "singles": SegmentKind.TWO_SIDE,
    "tag team": SegmentKind.TWO_SIDE,
    "handicap": SegmentKind.HANDICAP,
    "triple threat": SegmentKind.MULTI_SIDE,
    "fatal four way": SegmentKind.MULTI_SIDE,
    "free-for-all": SegmentKind.MULTI_SIDE,
    "abu dhabi rumble": SegmentKind.MULTI_SIDE,
}


def default_weight_policy() -> WeightPolicy:
    return WeightPolicy()


def default_reward_policy() -> RewardPolicy:
    return RewardPolicy()


def segment_kind_for_label(label: str) -> SegmentKind | None:
    return SEGMENT_TYPE_KINDS.get(label.strip().lower())


def segment_family(label: str) -> str | None:
    kind = segment_kind_for_label(label)
    if kind is None:
        return None
    return MATCH if kind.is_match else PROMO


def load_policies(payload: Mapping[str, Any]) -> tuple[WeightPolicy, RewardPolicy]:
    unknown = set(payload) - {"weights", "rewards"}
    if unknown:
        raise PolicyError(f"unknown policy sections: {', '.join(sorted(unknown))}")

    weight_raw = dict(payload.get("weights") or {})
    reward_raw = dict(payload.get("rewards") or {})
    _reject_unknown_fields(WeightPolicy, weight_raw, "weights")
    _reject_unknown_fields(RewardPolicy, reward_raw, "rewards")

    if "tier_bonuses" in weight_raw:
        weight_raw["tier_bonuses"] = _parse_tier_bonuses(weight_raw["tier_bonuses"])

    weights = WeightPolicy(**weight_raw)
    rewards = RewardPolicy(**reward_raw)
    try:
        weights.validate()
        rewards.validate()
    except ValueError as exc:
        raise PolicyError(str(exc)) from exc
    return weights, rewards


def load_policy_file(path: Path) -> tuple[WeightPolicy, RewardPolicy]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PolicyError(f"policy file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise PolicyError(f"policy file {path} must contain a JSON object")
    return load_policies(payload)


def _reject_unknown_fields(cls: type, raw: Mapping[str, Any], section: str) -> None:
    known = {f.name for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise PolicyError(f"unknown {section} policy keys: {', '.join(sorted(unknown))}")


def _parse_tier_bonuses(raw: Any) -> dict[Tier, int]:
    if not isinstance(raw, Mapping):
        raise PolicyError("tier_bonuses must be an object keyed by tier")
    parsed: dict[Tier, int] = {}
    for key, value in raw.items():
        try:
            tier = key if isinstance(key, Tier) else Tier(str(key).lower())
        except ValueError as exc:
            raise PolicyError(f"unknown tier '{key}' in tier_bonuses") from exc
        parsed[tier] = int(value)
    return parsed
