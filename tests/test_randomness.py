from __future__ import annotations

import pytest

from ringside.core import (
    RandomSourceExhaustedError,
    RecordingRandomSource,
    ScriptedRandomSource,
    ScriptMismatchError,
    make_id,
    new_segment_id,
    seeded_random,
)


def test_seeded_sources_and_substreams_are_deterministic():
    a, b = seeded_random(5), seeded_random(5)
    assert [a.randint(1, 20) for _ in range(10)] == [b.randint(1, 20) for _ in range(10)]
    assert seeded_random(5).spawn("seg:1").rand() == seeded_random(5).spawn("seg:1").rand()
    assert seeded_random(5).spawn("seg:1").rand() != seeded_random(5).spawn("seg:2").rand()


def test_scripted_source_checks_draw_types():
    with pytest.raises(ScriptMismatchError):
        ScriptedRandomSource([1.0]).rand()
    with pytest.raises(ScriptMismatchError):
        ScriptedRandomSource([7]).randint(1, 6)
    with pytest.raises(ScriptMismatchError):
        ScriptedRandomSource([0.5]).randint(1, 6)


def test_scripted_source_reports_exhaustion():
    source = ScriptedRandomSource([0.25, 3])
    assert source.rand() == 0.25
    assert source.randint(1, 6) == 3
    with pytest.raises(RandomSourceExhaustedError, match="exhausted after 2 draws"):
        source.rand()


def test_scripted_spawn_shares_one_sequence():
    source = ScriptedRandomSource([2, 4])
    assert source.spawn("x").randint(1, 6) == 2
    assert source.randint(1, 6) == 4


def test_recording_source_captures_child_streams():
    recorder = RecordingRandomSource(seeded_random(3))
    values = [recorder.rand(), recorder.spawn("child").randint(1, 20), recorder.randint(1, 6)]
    assert recorder.draws == values
    replay = recorder.replay()
    assert [replay.rand(), replay.randint(1, 20), replay.randint(1, 6)] == values


def test_ids_carry_prefix():
    assert new_segment_id().startswith("seg_")
    with pytest.raises(ValueError):
        make_id("bad_prefix")


def test_scripted_source_rejects_non_numeric_values():
    with pytest.raises(ScriptMismatchError):
        ScriptedRandomSource(["0.5"]).rand()
    with pytest.raises(ScriptMismatchError):
        ScriptedRandomSource([None]).rand()
    with pytest.raises(ScriptMismatchError):
        ScriptedRandomSource([True]).rand()
