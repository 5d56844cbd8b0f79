from __future__ import annotations

from pathlib import Path

from matplotlib.figure import Figure

from ringside.contracts import CalibrationRunResult


def render_win_rate_chart(result: CalibrationRunResult, output_path: Path, labels: list[str] | None = None) -> Path:
    """Grouped bars of observed vs expected win rate per side, written as PNG."""
    labels = labels or [f"side {idx} ({w})" for idx, w in enumerate(result.side_weights)]
    if len(labels) != len(result.side_weights):
        raise ValueError("one label per side is required")

    positions = list(range(len(labels)))
    width = 0.38
    fig = Figure(figsize=(4.5, 2.4), dpi=100)
    ax = fig.add_subplot(111)
    ax.bar([p - width / 2 for p in positions], result.expected_rates, width, label="expected")
    ax.bar([p + width / 2 for p in positions], result.observed_rates, width, label="observed")
    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.set_ylim(0.0, 1.0)
    ax.set_title(f"Win rate over {result.sample_count} resolutions")
    ax.grid(alpha=0.3, axis="y")
    ax.legend(fontsize="small")
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path)
    return output_path
