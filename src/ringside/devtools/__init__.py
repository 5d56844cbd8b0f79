from .charting import render_win_rate_chart

__all__ = ["render_win_rate_chart"]
