from __future__ import annotations

from pathlib import Path
from typing import Any

import duckdb

from ringside.contracts import ResultSink, SegmentResolution


class ResolutionLedger(ResultSink):
    """Adjudicated segments and their deltas; recording a segment id again replaces it."""

    TABLES = ("segment_results", "segment_rewards")

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.initialize_schema()

    def connect(self) -> Any:
        return duckdb.connect(str(self.db_path))

    def initialize_schema(self) -> None:
        with self.connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS segment_results (
                    segment_id VARCHAR PRIMARY KEY,
                    kind VARCHAR,
                    winning_index INTEGER,
                    d20 INTEGER,
                    bonus INTEGER,
                    participant_count INTEGER,
                    winner_ids VARCHAR,
                    resolved_at VARCHAR
                );

                CREATE TABLE IF NOT EXISTS segment_rewards (
                    segment_id VARCHAR,
                    competitor_id VARCHAR,
                    is_winner BOOLEAN,
                    fan_delta BIGINT,
                    bump_delta INTEGER,
                    PRIMARY KEY(segment_id, competitor_id)
                );
                """
            )

    def record(self, resolution: SegmentResolution) -> None:
        winner_ids = [w.competitor_id for w in resolution.winners]
        winning_index = resolution.outcome.winning_index if resolution.outcome is not None else None
        with self.connect() as conn:
            conn.execute("DELETE FROM segment_rewards WHERE segment_id = ?", [resolution.segment_id])
            conn.execute("DELETE FROM segment_results WHERE segment_id = ?", [resolution.segment_id])
            conn.execute(
                "INSERT INTO segment_results VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    resolution.segment_id,
                    resolution.kind.value,
                    winning_index,
                    resolution.quality.d20,
                    resolution.quality.bonus,
                    len(resolution.participants),
                    ",".join(winner_ids),
                    resolution.resolved_at.isoformat(),
                ],
            )
            rows = [
                (
                    resolution.segment_id,
                    competitor_id,
                    competitor_id in winner_ids,
                    delta.fans,
                    delta.bumps,
                )
                for competitor_id, delta in resolution.rewards.items()
            ]
            if rows:
                conn.executemany("INSERT INTO segment_rewards VALUES (?, ?, ?, ?, ?)", rows)

    def list_results(self) -> list[dict[str, Any]]:
        with self.connect() as conn:
            rows = conn.execute(
                """
                SELECT segment_id, kind, winning_index, d20, bonus, participant_count, winner_ids
                FROM segment_results
                ORDER BY resolved_at, segment_id
                """
            ).fetchall()
        return [
            {
                "segment_id": r[0],
                "kind": r[1],
                "winning_index": r[2],
                "d20": r[3],
                "bonus": r[4],
                "participant_count": r[5],
                "winner_ids": [w for w in r[6].split(",") if w],
            }
            for r in rows
        ]

    def rewards_for(self, segment_id: str) -> dict[str, tuple[int, int]]:
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT competitor_id, fan_delta, bump_delta FROM segment_rewards WHERE segment_id = ?",
                [segment_id],
            ).fetchall()
        return {r[0]: (int(r[1]), int(r[2])) for r in rows}

    def fan_totals(self) -> dict[str, int]:
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT competitor_id, SUM(fan_delta) FROM segment_rewards GROUP BY competitor_id"
            ).fetchall()
        return {r[0]: int(r[1]) for r in rows}

    def export(self, output_dir: Path) -> tuple[list[Path], dict[str, int]]:
        output_dir.mkdir(parents=True, exist_ok=True)
        outputs: list[Path] = []
        row_counts: dict[str, int] = {}
        with self.connect() as conn:
            for table in self.TABLES:
                count_row = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
                row_counts[table] = int(count_row[0]) if count_row is not None else 0
                csv_path = output_dir / f"{table}.csv"
                parquet_path = output_dir / f"{table}.parquet"
                conn.execute(f"COPY (SELECT * FROM {table}) TO '{csv_path.as_posix()}' (HEADER, DELIMITER ',')")
                conn.execute(f"COPY (SELECT * FROM {table}) TO '{parquet_path.as_posix()}' (FORMAT PARQUET)")
                outputs.extend([csv_path, parquet_path])
        return outputs, row_counts
