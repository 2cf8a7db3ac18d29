from .base import QueryableSpecification, Specification
from .locator import SpecificationLocator
from .result import QueryableSpecificationResult

__all__ = [
    "QueryableSpecification",
    "QueryableSpecificationResult",
    "Specification",
    "SpecificationLocator",
]
