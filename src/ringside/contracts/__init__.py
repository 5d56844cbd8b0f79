from .types import (
    AppliedReward,
    CalibrationRunRequest,
    CalibrationRunResult,
    Competitor,
    Outcome,
    QualityRoll,
    RandomSource,
    ResultSink,
    RewardDelta,
    RewardMap,
    RewardPolicy,
    SegmentKind,
    SegmentResolution,
    Side,
    Tier,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    WeightPolicy,
)

__all__ = [
    "AppliedReward",
    "CalibrationRunRequest",
    "CalibrationRunResult",
    "Competitor",
    "Outcome",
    "QualityRoll",
    "RandomSource",
    "ResultSink",
    "RewardDelta",
    "RewardMap",
    "RewardPolicy",
    "SegmentKind",
    "SegmentResolution",
    "Side",
    "Tier",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "WeightPolicy",
]
