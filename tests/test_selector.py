from __future__ import annotations

import logging

import pytest

from ringside.contracts import Tier, ValidationError
from ringside.core import ScriptedRandomSource, seeded_random
from ringside.resolution import OutcomeSelector, resolve_sides, select_index
from tests.helpers import competitor, side, singles


def test_select_index_maps_draw_onto_cumulative_weights():
    assert select_index([50_000, 10_000], 0.79) == 0
    assert select_index([50_000, 10_000], 0.84) == 1
    assert select_index([3, 2, 1], 0.0) == 0


def test_boundary_point_goes_to_side_above():
    assert select_index([1, 1], 0.5) == 1
    assert select_index([2, 2, 4], 0.25) == 1
    assert select_index([2, 2, 4], 0.5) == 2


def test_select_index_rejects_bad_inputs():
    with pytest.raises(ValueError):
        select_index([1, 1], 1.0)
    with pytest.raises(ValidationError) as ex:
        select_index([5, 0], 0.1)
    assert ex.value.codes == ["NON_POSITIVE_WEIGHT"]


def test_resolution_is_deterministic_for_same_draws():
    sides = singles(250_000, 50_000)
    first = [resolve_sides(sides, seeded_random(42).spawn(f"seg:{i}")) for i in range(50)]
    second = [resolve_sides(sides, seeded_random(42).spawn(f"seg:{i}")) for i in range(50)]
    assert first == second


def test_selection_consumes_exactly_one_draw():
    source = ScriptedRandomSource([0.79, 0.5])
    outcome = OutcomeSelector().select(singles(250_000, 50_000), source)
    assert outcome.winning_index == 0
    assert outcome.side_weights == [50_000, 10_000]
    assert [c.competitor_id for c in outcome.winners] == ["alpha"]
    assert [c.competitor_id for c in outcome.losers] == ["bravo"]
    assert source.remaining == 1


def test_favourite_wins_most_resolutions():
    sides = [side(competitor("star", 40_000, Tier.CONTENDER)), side(competitor("rook", 1_000, Tier.ROOKIE))]
    source = seeded_random(2024)
    wins = sum(1 for _ in range(1_000) if resolve_sides(sides, source) == 0)
    assert wins / 1_000 >= 0.8


def test_multi_side_and_handicap_segments_resolve():
    three = [side(competitor(f"c{i}", 5_000 * (i + 1))) for i in range(3)]
    assert resolve_sides(three, ScriptedRandomSource([0.99])) == 2

    handicap = [side(competitor("big", 20_000)), side(competitor("x", 1_000), competitor("y", 1_000))]
    outcome = OutcomeSelector().select(handicap, ScriptedRandomSource([0.95]))
    assert outcome.winning_index == 1
    assert [c.competitor_id for c in outcome.losers] == ["big"]


def test_invalid_sides_fail_before_any_draw():
    source = ScriptedRandomSource([])
    with pytest.raises(ValidationError) as ex:
        resolve_sides([side(competitor("solo"))], source)
    assert ex.value.codes == ["TOO_FEW_SIDES"]

    with pytest.raises(ValidationError) as ex:
        resolve_sides([side(competitor("a")), side()], source)
    assert ex.value.codes == ["EMPTY_SIDE"]

    dup = competitor("a")
    with pytest.raises(ValidationError) as ex:
        resolve_sides([side(dup), side(dup)], source)
    assert ex.value.codes == ["DUPLICATE_COMPETITOR"]

    with pytest.raises(ValidationError) as ex:
        resolve_sides([side(competitor("a", -5)), side(competitor("b"))], source)
    assert ex.value.codes == ["NEGATIVE_FANS"]
    assert source.remaining == 0


def test_selection_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="ringside")
    OutcomeSelector().select(singles(250_000, 50_000), ScriptedRandomSource([0.79]))
    assert "Alpha wins" in caplog.text
