from .criteria import CriteriaSpecification, CriteriaSpecificationResult

__all__ = ["CriteriaSpecification", "CriteriaSpecificationResult"]
