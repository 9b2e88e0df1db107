"""Result aggregation and presentation."""

from ugf.results.aggregate import AggregatedResult, aggregate
from ugf.results.presenter import ResultView, build_result_view

__all__ = [
    "AggregatedResult",
    "ResultView",
    "aggregate",
    "build_result_view",
]
