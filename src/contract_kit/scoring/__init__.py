from .budget import CoverageBudgeter
from .config import BudgetConfig, ScoringConfig
from .importance import ImportanceScorer
from .models import Chunk, ChunkingResult, Strategy

__all__ = [
    "BudgetConfig",
    "Chunk",
    "ChunkingResult",
    "CoverageBudgeter",
    "ImportanceScorer",
    "ScoringConfig",
    "Strategy",
]
