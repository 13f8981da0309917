"""Rendering of matched benefits into cards and HTML."""

from src.rendering.cards import BenefitCard, build_card, build_cards, templates

__all__ = ["BenefitCard", "build_card", "build_cards", "templates"]
