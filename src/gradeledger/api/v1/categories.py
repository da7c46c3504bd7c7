"""
Category API Endpoints
"""

from fastapi import APIRouter

from gradeledger.core.categories import category_label
from gradeledger.core.schemas import CategoryLabel

router = APIRouter()


@router.get("/{category}", response_model=CategoryLabel)
async def get_category_label(category: str) -> CategoryLabel:
    """Display label for a category name or ordinal.

    Unrecognized categories get the label "Unknown".
    """
    key: str | int = int(category) if category.isdecimal() else category
    return CategoryLabel(category=category, label=category_label(key))
