"""The calculator catalog. Importing this package registers every calculator."""

from calchub.catalog import education, everyday, finance, pension, science, tax  # noqa: F401
from calchub.catalog.base import REGISTRY
from calchub.models import CalculatorDefinition, CalculatorInfo


def get_definition(calculator_id: str) -> CalculatorDefinition:
    """Look up a calculator; raises CalculatorNotFoundError for unknown ids."""
    return REGISTRY.get(calculator_id)


def all_calculators() -> list[CalculatorInfo]:
    return REGISTRY.all_calculators()


def search(query: str) -> list[CalculatorInfo]:
    return REGISTRY.search(query)


__all__ = ["REGISTRY", "all_calculators", "get_definition", "search"]
