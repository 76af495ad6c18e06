# src/contract_kit/scoring/importance.py

from .config import ScoringConfig


class ImportanceScorer:
    """Heuristic relevance of contract text.

    Pure: the same text and title always produce the same score, which is
    never below ``config.base_score``.
    """

    def __init__(self, config: ScoringConfig = ScoringConfig()) -> None:
        self.config = config

    def score(self, text: str, section_title: str | None = None) -> float:
        """Score a chunk by keyword hits, section title and length band."""
        config = self.config
        score = config.base_score

        lower_text = text.lower()
        for keyword in config.keywords:
            if keyword in lower_text:
                score += config.keyword_weight

        if section_title:
            lower_title = section_title.lower()
            for important in config.important_sections:
                if important in lower_title:
                    score += config.section_weight

        low, high = config.moderate_length
        if low < len(text) < high:
            score += config.length_bonus

        return score

    def score_section(self, content: str, title: str) -> float:
        """Score a whole section; critical titles weigh more than for chunks."""
        score = self.score(content, title)

        lower_title = title.lower()
        for critical in self.config.critical_sections:
            if critical in lower_title:
                score += self.config.critical_weight

        return score
