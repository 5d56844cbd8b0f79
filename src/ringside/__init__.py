from .contracts import Competitor, RewardDelta, SegmentKind, Side, Tier
from .resolution import SegmentAdjudicator, adjudicate, resolve_sides

__version__ = "1.0.0"

__all__ = [
    "Competitor",
    "RewardDelta",
    "SegmentAdjudicator",
    "SegmentKind",
    "Side",
    "Tier",
    "adjudicate",
    "resolve_sides",
]
