"""
Concentration metrics shared by the revenue and volume dependency reports.
"""

from collections.abc import Iterable, Sequence

from dispatch_analytics.models.report_models import ConcentrationMetrics
from dispatch_analytics.tools.report_utils import percentage, round_half_up


def herfindahl_index(shares: Iterable[float]) -> int:
    """
    Sum of squared percentage shares.

    0 means perfect competition, 10000 a single firm.
    """
    return int(round_half_up(sum(share**2 for share in shares), 0))


def top_share(values: Sequence[float], count: int, total: float) -> float:
    """Percentage of ``total`` held by the first ``count`` values (sorted descending)."""
    return percentage(sum(values[:count]), total)


def concentration_metrics(values: Sequence[float], digits: int = 2) -> ConcentrationMetrics:
    """
    Top-1/3/5 shares and HHI for per-firm totals sorted descending.
    """
    total = sum(values)
    shares = [percentage(value, total) for value in values]
    return ConcentrationMetrics(
        top_1_percentage=round_half_up(top_share(values, 1, total), digits),
        top_3_percentage=round_half_up(top_share(values, 3, total), digits),
        top_5_percentage=round_half_up(top_share(values, 5, total), digits),
        herfindahl_index=herfindahl_index(shares),
    )
