"""Service selection for authentication transactions."""

from .selection import (
    ServiceSelectionStrategy,
    DefaultServiceSelectionStrategy,
    QueryParameterServiceSelectionStrategy,
    ServiceSelectionPlan,
)

__all__ = [
    "ServiceSelectionStrategy",
    "DefaultServiceSelectionStrategy",
    "QueryParameterServiceSelectionStrategy",
    "ServiceSelectionPlan",
]
