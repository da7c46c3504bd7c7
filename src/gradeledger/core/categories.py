"""
Performance categories and their display labels.
"""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    """Performance category, best first."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    NEEDS_IMPROVEMENT = "NeedsImprovement"


CATEGORY_LABELS: dict[Category, str] = {
    Category.EXCELLENT: "Excellent",
    Category.GOOD: "Good",
    Category.AVERAGE: "Average",
    Category.NEEDS_IMPROVEMENT: "Needs Improvement",
}

UNKNOWN_LABEL = "Unknown"


def category_label(category: object) -> str:
    """
    Display label for a category.

    Accepts a Category, its value ("NeedsImprovement"), its member name
    ("NEEDS_IMPROVEMENT") or its position in best-first order (0-3).
    Anything else maps to "Unknown" instead of failing.

    Examples:
        >>> category_label("NeedsImprovement")
        'Needs Improvement'
        >>> category_label(7)
        'Unknown'
    """
    members = list(Category)

    if isinstance(category, Category):
        return CATEGORY_LABELS[category]

    if isinstance(category, int) and not isinstance(category, bool):
        if 0 <= category < len(members):
            return CATEGORY_LABELS[members[category]]
        return UNKNOWN_LABEL

    if isinstance(category, str):
        for member in members:
            if category in (member.value, member.name):
                return CATEGORY_LABELS[member]

    return UNKNOWN_LABEL
