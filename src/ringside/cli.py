from __future__ import annotations

import argparse
from pathlib import Path

from ringside.contracts import CalibrationRunRequest, RewardPolicy
from ringside.core import default_reward_policy, gameplay_random, load_policy_file, seeded_random
from ringside.logging_config import setup_logging
from ringside.resolution import CalibrationService, RewardCalculator, roll_quality


def _parse_weights(raw: str) -> list[int]:
    try:
        weights = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"weights must be comma-separated integers: {raw}") from exc
    if len(weights) < 2:
        raise argparse.ArgumentTypeError("at least two side weights are required")
    return weights


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ringside segment resolution engine tools")
    parser.add_argument("--log-level", default="WARNING", help="logging level for console output")
    parser.add_argument("--log-dir", type=Path, default=None, help="directory for rotating log files")
    parser.add_argument("--policy", type=Path, default=None, help="JSON file with reward policy overrides (bonus command only)")
    sub = parser.add_subparsers(dest="command", required=True)

    cal = sub.add_parser("calibrate", help="compare observed win rates against side weights")
    cal.add_argument("--weights", type=_parse_weights, required=True, help="comma-separated side weights")
    cal.add_argument("--samples", type=int, default=1000, help="number of resolutions to run")
    cal.add_argument("--seed", type=int, default=None, help="seed for deterministic runs")
    cal.add_argument("--duckdb", type=Path, default=None, help="persist the run into this duckdb file")
    cal.add_argument("--chart", type=Path, default=None, help="write a PNG win-rate chart")

    bonus = sub.add_parser("bonus", help="roll one quality bonus and show the reward scale")
    bonus.add_argument("--seed", type=int, default=None, help="seed for deterministic runs")
    return parser


def _run_calibrate(args: argparse.Namespace) -> None:
    service = CalibrationService()
    result = service.run_batch(CalibrationRunRequest(side_weights=args.weights, sample_count=args.samples, seed=args.seed))
    print(f"Calibration run {result.run_id} ({result.sample_count} samples)")
    for idx, weight in enumerate(result.side_weights):
        print(
            f"- side {idx} (weight {weight}): {result.win_counts[idx]} wins, "
            f"observed {result.observed_rates[idx]:.3f} vs expected {result.expected_rates[idx]:.3f}"
        )
    print(f"Max deviation: {result.max_deviation:.4f}")

    if args.duckdb is not None:
        service.persist_result(result, args.duckdb)
        print(f"Persisted to {args.duckdb}")
    if args.chart is not None:
        from ringside.devtools import render_win_rate_chart

        print(f"Chart written to {render_win_rate_chart(result, args.chart)}")


def _run_bonus(args: argparse.Namespace, reward_policy: RewardPolicy) -> None:
    random_source = seeded_random(args.seed) if args.seed is not None else gameplay_random()
    quality = roll_quality(random_source)
    calculator = RewardCalculator(reward_policy)
    print(f"d20={quality.d20} extra={list(quality.extra_draws)} bonus={quality.bonus}")
    print(f"Promo fan award per participant: {calculator.promo_award(quality.bonus)}")


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "calibrate" and args.policy is not None:
        parser.error("--policy only applies to the bonus command; calibrate works on raw side weights")
    setup_logging(args.log_level, log_dir=args.log_dir)

    reward_policy = default_reward_policy()
    if args.policy is not None:
        _, reward_policy = load_policy_file(args.policy)

    if args.command == "calibrate":
        _run_calibrate(args)
    elif args.command == "bonus":
        _run_bonus(args, reward_policy)


if __name__ == "__main__":
    main()
