"""Benefits data source: CSV loader and the shared catalog."""

from src.data.catalog import BenefitCatalog
from src.data.loader import load_benefits, parse_benefits_csv

__all__ = ["BenefitCatalog", "load_benefits", "parse_benefits_csv"]
