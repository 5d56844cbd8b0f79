from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import duckdb

from ringside.contracts import CalibrationRunRequest, CalibrationRunResult
from ringside.core import gameplay_random, new_calibration_run_id, seeded_random
from ringside.resolution.selector import select_index
from ringside.resolution.validation import SegmentValidator
from ringside.resolution.weights import win_probabilities

logger = logging.getLogger(__name__)


class CalibrationService:
    """Batch runner that compares observed win rates against weight shares."""

    def __init__(self, validator: SegmentValidator | None = None) -> None:
        self._validator = validator or SegmentValidator()

    def run_batch(self, request: CalibrationRunRequest) -> CalibrationRunResult:
        if request.sample_count <= 0:
            raise ValueError("sample_count must be > 0")
        self._validator.validate_weights(request.side_weights)
        random_source = seeded_random(request.seed) if request.seed is not None else gameplay_random()

        win_counts = [0] * len(request.side_weights)
        for idx in range(request.sample_count):
            substream = random_source.spawn(f"calibration:{idx}")
            win_counts[select_index(request.side_weights, substream.rand())] += 1

        expected = win_probabilities(request.side_weights)
        observed = [count / request.sample_count for count in win_counts]
        deviation = max(abs(o - e) for o, e in zip(observed, expected))
        logger.info(
            "Calibration over %d samples: observed %s vs expected %s (max deviation %.4f)",
            request.sample_count,
            [round(o, 4) for o in observed],
            [round(e, 4) for e in expected],
            deviation,
        )
        return CalibrationRunResult(
            run_id=new_calibration_run_id(),
            side_weights=list(request.side_weights),
            sample_count=request.sample_count,
            win_counts=win_counts,
            observed_rates=observed,
            expected_rates=expected,
            max_deviation=deviation,
            seed=request.seed,
        )

    def persist_result(self, result: CalibrationRunResult, duckdb_path: Path) -> None:
        duckdb_path.parent.mkdir(parents=True, exist_ok=True)
        with duckdb.connect(str(duckdb_path)) as conn:
            self._ensure_schema(conn)
            conn.execute(
                """
                INSERT OR REPLACE INTO calibration_runs(
                    run_id, side_weights_json, sample_count, max_deviation, seed
                ) VALUES (?, ?, ?, ?, ?)
                """,
                [
                    result.run_id,
                    json.dumps(result.side_weights),
                    result.sample_count,
                    result.max_deviation,
                    result.seed,
                ],
            )
            conn.execute("DELETE FROM calibration_side_rates WHERE run_id = ?", [result.run_id])
            rows = [
                (result.run_id, idx, weight, wins, observed, expected)
                for idx, (weight, wins, observed, expected) in enumerate(
                    zip(result.side_weights, result.win_counts, result.observed_rates, result.expected_rates)
                )
            ]
            conn.executemany(
                """
                INSERT INTO calibration_side_rates(
                    run_id, side_index, side_weight, win_count, observed_rate, expected_rate
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                rows,
            )

    def load_runs(self, duckdb_path: Path) -> list[dict[str, Any]]:
        with duckdb.connect(str(duckdb_path)) as conn:
            self._ensure_schema(conn)
            rows = conn.execute(
                "SELECT run_id, side_weights_json, sample_count, max_deviation, seed FROM calibration_runs ORDER BY run_id"
            ).fetchall()
        return [
            {
                "run_id": r[0],
                "side_weights": json.loads(r[1]),
                "sample_count": r[2],
                "max_deviation": r[3],
                "seed": r[4],
            }
            for r in rows
        ]

    def _ensure_schema(self, conn: Any) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS calibration_runs (
                run_id VARCHAR PRIMARY KEY,
                side_weights_json VARCHAR,
                sample_count INTEGER,
                max_deviation DOUBLE,
                seed BIGINT,
                persisted_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS calibration_side_rates (
                run_id VARCHAR NOT NULL,
                side_index INTEGER NOT NULL,
                side_weight BIGINT NOT NULL,
                win_count INTEGER NOT NULL,
                observed_rate DOUBLE NOT NULL,
                expected_rate DOUBLE NOT NULL,
                PRIMARY KEY (run_id, side_index)
            )
            """
        )


def calibration_result_to_dict(result: CalibrationRunResult) -> dict[str, Any]:
    return asdict(result)
