"""Display view models for aggregated results."""

from __future__ import annotations

from pydantic import BaseModel

from ugf.classify.types import Category
from ugf.results.aggregate import AggregatedResult

CATEGORY_COLORS: dict[str, str] = {
    Category.TREES_AND_SHRUBS: "#22C55E",
    Category.GREEN_OPEN_SPACE: "#84CC16",
    Category.PERMEABLE_SURFACES: "#F97316",
    Category.IMPERMEABLE_SURFACES: "#71717A",
    Category.INCIDENTAL_PLAY_AREA: "#3B82F6",
}
FALLBACK_COLOR = "#CCCCCC"


class BarSegment(BaseModel):
    category: str
    label: str
    width_percent: float
    color: str
    title: str


class ResultCard(BaseModel):
    category: str
    label: str
    color: str
    percentage: str
    description: str


class ResultView(BaseModel):
    """Stacked bar, card list and total for one analysis."""

    bar: list[BarSegment]
    cards: list[ResultCard]
    total_percentage: float
    total_label: str


def category_label(category: str) -> str:
    return category.replace("_", " ")


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, FALLBACK_COLOR)


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"


def format_share(value: float) -> str:
    """Full-precision number for hover titles, without a trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_result_view(result: AggregatedResult) -> ResultView:
    bar: list[BarSegment] = []
    cards: list[ResultCard] = []
    for entry in result.entries:
        label = category_label(entry.category)
        color = category_color(entry.category)
        bar.append(
            BarSegment(
                category=entry.category,
                label=label,
                width_percent=entry.percentage,
                color=color,
                title=f"{label}: {format_share(entry.percentage)}%",
            )
        )
        cards.append(
            ResultCard(
                category=entry.category,
                label=label,
                color=color,
                percentage=format_percentage(entry.percentage),
                description=entry.description,
            )
        )
    return ResultView(
        bar=bar,
        cards=cards,
        total_percentage=result.total_percentage,
        total_label=f"Total Calculated: {format_percentage(result.total_percentage)}",
    )
