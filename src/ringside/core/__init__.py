from .errors import ClassificationError, PolicyError, RandomSourceExhaustedError, ScriptMismatchError
from .ids import make_id, new_calibration_run_id, new_segment_id, now_utc
from .policy import (
    default_reward_policy,
    default_weight_policy,
    load_policies,
    load_policy_file,
    segment_family,
    segment_kind_for_label,
)
from .randomness import (
    PythonRandomSource,
    RecordingRandomSource,
    ScriptedRandomSource,
    gameplay_random,
    seeded_random,
)

__all__ = [
    "ClassificationError",
    "PolicyError",
    "PythonRandomSource",
    "RandomSourceExhaustedError",
    "RecordingRandomSource",
    "ScriptMismatchError",
    "ScriptedRandomSource",
    "default_reward_policy",
    "default_weight_policy",
    "gameplay_random",
    "load_policies",
    "load_policy_file",
    "make_id",
    "new_calibration_run_id",
    "new_segment_id",
    "now_utc",
    "seeded_random",
    "segment_family",
    "segment_kind_for_label",
]
