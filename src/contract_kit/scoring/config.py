# src/contract_kit/scoring/config.py

from dataclasses import dataclass

DEFAULT_KEYWORDS: tuple[str, ...] = (
    # financial
    "purchase price",
    "earnest money",
    "financing",
    # dates
    "closing date",
    # contingencies
    "contingency",
    "inspection",
    # title & transfer
    "deed",
    "title",
    "warranty",
    # liability
    "liability",
    "default",
    "termination",
    "breach",
    "damages",
)

DEFAULT_IMPORTANT_SECTIONS: tuple[str, ...] = (
    "terms",
    "conditions",
    "price",
    "payment",
    "closing",
    "contingencies",
    "inspection",
    "financing",
)

DEFAULT_CRITICAL_SECTIONS: tuple[str, ...] = (
    "purchase and sale",
    "terms and conditions",
    "closing",
    "financing",
    "inspection",
    "contingencies",
    "price",
)


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and vocabularies for heuristic importance scoring.

    Immutable. Keyword and section lists are matched as lower-case substrings.
    ``moderate_length`` is an exclusive ``(low, high)`` character band.
    """

    base_score: float = 1.0
    keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    keyword_weight: float = 0.5
    important_sections: tuple[str, ...] = DEFAULT_IMPORTANT_SECTIONS
    section_weight: float = 1.0
    critical_sections: tuple[str, ...] = DEFAULT_CRITICAL_SECTIONS
    critical_weight: float = 2.0
    moderate_length: tuple[int, int] = (200, 2000)
    length_bonus: float = 0.3


@dataclass(frozen=True)
class BudgetConfig:
    """Configuration for token-budgeted coverage selection."""

    chars_per_token: float = 3.0
    max_tokens: int = 100_000
    chunk_size: int = 1500
    overlap: int = 300
