from __future__ import annotations

from pathlib import Path

import pytest

from ringside.contracts import CalibrationRunRequest, ValidationError
from ringside.devtools import render_win_rate_chart
from ringside.resolution import CalibrationService, calibration_result_to_dict


def test_calibration_tracks_weight_share():
    result = CalibrationService().run_batch(CalibrationRunRequest(side_weights=[3, 2, 1], sample_count=3_000, seed=17))
    assert sum(result.win_counts) == 3_000
    assert result.expected_rates == pytest.approx([0.5, 1 / 3, 1 / 6])
    assert result.max_deviation < 0.05


def test_calibration_is_repeatable_for_a_seed():
    service = CalibrationService()
    first = service.run_batch(CalibrationRunRequest(side_weights=[40_000, 1_000], sample_count=500, seed=3))
    second = service.run_batch(CalibrationRunRequest(side_weights=[40_000, 1_000], sample_count=500, seed=3))
    assert first.win_counts == second.win_counts
    assert first.observed_rates[0] >= 0.8


def test_calibration_rejects_bad_requests():
    service = CalibrationService()
    with pytest.raises(ValueError):
        service.run_batch(CalibrationRunRequest(side_weights=[1, 1], sample_count=0))
    with pytest.raises(ValidationError):
        service.run_batch(CalibrationRunRequest(side_weights=[1], sample_count=10))


def test_calibration_persist_and_chart(tmp_path: Path):
    service = CalibrationService()
    result = service.run_batch(CalibrationRunRequest(side_weights=[5, 1], sample_count=200, seed=8))
    db_path = tmp_path / "calibration.duckdb"
    service.persist_result(result, db_path)
    service.persist_result(result, db_path)

    runs = service.load_runs(db_path)
    assert len(runs) == 1
    assert runs[0]["run_id"] == result.run_id
    assert runs[0]["side_weights"] == [5, 1]
    assert runs[0]["seed"] == 8
    assert calibration_result_to_dict(result)["win_counts"] == result.win_counts

    chart = render_win_rate_chart(result, tmp_path / "charts" / "rates.png")
    assert chart.exists() and chart.stat().st_size > 0
    with pytest.raises(ValueError):
        render_win_rate_chart(result, tmp_path / "bad.png", labels=["only one"])
