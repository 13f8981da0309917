"""Render sink — turns matched benefit records into display cards and HTML.

The matcher hands over raw strings; escaping happens in the templates, through
Jinja2 autoescaping, and nowhere else.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from src.rendering.formatters import format_progress, safe_url
from src.schemas.benefits import BenefitRecord

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_TITLE = "Unnamed Benefit"
DEFAULT_DESCRIPTION = "No description available."
DEFAULT_URL = "#"
LINK_TEXT = "Learn More & Apply"


class BenefitCard(BaseModel):
    """Display-ready view of one benefit."""

    title: str
    description: str
    url: str
    department: str | None = None
    link_text: str = LINK_TEXT


def build_card(benefit: BenefitRecord) -> BenefitCard:
    """Apply display fallbacks. The department line is dropped when blank."""
    return BenefitCard(
        title=benefit.service or DEFAULT_TITLE,
        description=benefit.description or DEFAULT_DESCRIPTION,
        url=safe_url(benefit.url, fallback=DEFAULT_URL),
        department=benefit.department or None,
    )


def build_cards(matches: Sequence[BenefitRecord]) -> list[BenefitCard]:
    cards = [build_card(b) for b in matches]
    logger.debug("Built %d benefit cards", len(cards))
    return cards


# The one template environment; Jinja2Templates turns HTML autoescaping on
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.filters["progress"] = format_progress
