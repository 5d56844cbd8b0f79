from __future__ import annotations

from pathlib import Path

import duckdb

from ringside.core import ScriptedRandomSource
from ringside.persistence import ResolutionLedger
from ringside.resolution import SegmentAdjudicator
from tests.helpers import competitor, side, singles


def test_ledger_records_and_exports_resolutions(tmp_path: Path):
    ledger = ResolutionLedger(tmp_path / "ledger.duckdb")
    adjudicator = SegmentAdjudicator(sink=ledger)
    adjudicator.resolve_segment(
        "singles",
        singles(250_000, 50_000),
        random_source=ScriptedRandomSource([0.79, 17, 3, 4, 5, 6, 2]),
        segment_id="seg_one",
    )
    adjudicator.resolve_segment(
        "promo",
        [side(competitor("alpha")), side(competitor("carol"))],
        random_source=ScriptedRandomSource([10, 5]),
        segment_id="seg_two",
    )

    results = {r["segment_id"]: r for r in ledger.list_results()}
    assert results["seg_one"]["winner_ids"] == ["alpha"]
    assert results["seg_one"]["winning_index"] == 0
    assert results["seg_one"]["bonus"] == 7
    assert results["seg_two"]["winner_ids"] == []
    assert results["seg_two"]["winning_index"] is None

    assert ledger.rewards_for("seg_one") == {"alpha": (21_000, 0), "bravo": (12_000, 1)}
    assert ledger.fan_totals() == {"alpha": 26_000, "bravo": 12_000, "carol": 5_000}

    outputs, counts = ledger.export(tmp_path / "exports")
    assert counts == {"segment_results": 2, "segment_rewards": 4}
    assert all(path.exists() for path in outputs)
    with duckdb.connect() as conn:
        parquet = (tmp_path / "exports" / "segment_rewards.parquet").as_posix()
        assert conn.execute(f"SELECT COUNT(*) FROM read_parquet('{parquet}')").fetchone()[0] == 4


def test_recording_same_segment_again_replaces_rows(tmp_path: Path):
    ledger = ResolutionLedger(tmp_path / "ledger.duckdb")
    adjudicator = SegmentAdjudicator(sink=ledger)
    for _ in range(2):
        adjudicator.resolve_segment(
            "singles",
            singles(),
            random_source=ScriptedRandomSource([0.2, 1, 1, 1, 1]),
            segment_id="seg_dup",
        )
    assert len(ledger.list_results()) == 1
    assert len(ledger.rewards_for("seg_dup")) == 2
