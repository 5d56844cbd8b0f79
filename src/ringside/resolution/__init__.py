from .adjudication import SegmentAdjudicator, adjudicate, classify_segment
from .calibration import CalibrationService, calibration_result_to_dict
from .quality import QUALITY_TABLE, QualityRow, compute_bonus, max_bonus, roll_quality, row_for
from .rewards import RewardCalculator, apply_rewards
from .selector import OutcomeSelector, resolve_sides, select_index
from .validation import SegmentValidator
from .weights import aggregate, competitor_weight, side_weights, weight, win_probabilities

__all__ = [
    "CalibrationService",
    "OutcomeSelector",
    "QUALITY_TABLE",
    "QualityRow",
    "RewardCalculator",
    "SegmentAdjudicator",
    "SegmentValidator",
    "adjudicate",
    "aggregate",
    "apply_rewards",
    "calibration_result_to_dict",
    "classify_segment",
    "competitor_weight",
    "compute_bonus",
    "max_bonus",
    "resolve_sides",
    "roll_quality",
    "row_for",
    "select_index",
    "side_weights",
    "weight",
    "win_probabilities",
]
