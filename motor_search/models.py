"""
Typed data models for the motor inventory search.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

T = TypeVar("T")


class MatchType(str, Enum):
    """How a field matched a query token."""
    EXACT = "exact"
    STARTS_WITH = "starts-with"
    CONTAINS = "contains"
    FUZZY = "fuzzy"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


# Lower index is the better match
MATCH_PRECEDENCE = (
    MatchType.EXACT,
    MatchType.STARTS_WITH,
    MatchType.CONTAINS,
    MatchType.FUZZY,
)

# External (camelCase) option names accepted alongside the field names
_OPTION_ALIASES = {
    "maxResults": "max_results",
    "boostExact": "boost_exact",
    "boostStartsWith": "boost_starts_with",
    "boostContains": "boost_contains",
}


@dataclass(frozen=True)
class SearchOptions:
    """Tuning knobs for fuzzy_search."""
    threshold: float = 0.4  # Minimum score (0-1) for a result to be kept
    max_results: Optional[int] = 50  # None disables truncation, 0 returns nothing
    boost_exact: float = 1.0
    boost_starts_with: float = 0.95
    boost_contains: float = 0.85

    @classmethod
    def resolve(
        cls, options: Union["SearchOptions", Mapping[str, Any], None] = None
    ) -> "SearchOptions":
        """
        Shallow-merge caller options over the defaults.

        Args:
            options: A SearchOptions instance, a mapping of option names
                (snake_case or camelCase) to values, or None.

        Returns:
            SearchOptions: The resolved options. Unknown keys are ignored.
        """
        if options is None:
            return cls()
        if isinstance(options, SearchOptions):
            return options

        known = {f.name for f in fields(cls)}
        overrides = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known:
                overrides[name] = value
        return replace(cls(), **overrides)


@dataclass(frozen=True)
class FieldScore:
    """Score of one field value against one query token."""
    score: float
    match_type: MatchType


@dataclass
class FuzzyResult(Generic[T]):
    """A search hit: the original item plus how well it matched."""
    item: T
    score: float
    match_type: MatchType
    matched_field: Optional[str] = None


@dataclass
class MotorRecord:
    """Outboard motor inventory record loaded from CSV."""
    id: str
    model: str
    hp: Optional[float] = None
    price: Optional[float] = None
    category: Optional[str] = None  # e.g. "FourStroke", "Pro XS", "Verado"
    model_code: Optional[str] = None
    description: Optional[str] = None
    in_stock: Optional[bool] = None
