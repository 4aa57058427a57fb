"""Keyword counting utilities used to compute base relevance scores."""

import re
from typing import Dict, List, Mapping


ENGLISH_WORD_PATTERN = re.compile(r'^[a-zA-Z]+$')


class KeywordCounter:
    """
    Counts keyword occurrences in page content.

    Pure ASCII-letter terms are matched on word boundaries; any other term
    (Chinese or mixed text) is matched as a non-overlapping substring.
    Matching is case-insensitive and counts are cached per term.
    """

    def __init__(self, content: str):
        """Initialize counter with the text to search."""
        self.content = content.lower() if content else ""
        self._counts: Dict[str, int] = {}

    def count_keyword(self, keyword: str) -> int:
        """
        Count occurrences of a keyword in the content.

        Args:
            keyword: Term to count

        Returns:
            Number of occurrences (0 for an empty term)
        """
        if not keyword:
            return 0

        term = keyword.lower().strip()
        if not term:
            return 0

        if term in self._counts:
            return self._counts[term]

        if ENGLISH_WORD_PATTERN.match(term):
            count = len(re.findall(r'\b' + re.escape(term) + r'\b', self.content))
        else:
            count = self.content.count(term)

        self._counts[term] = count
        return count

    def count_all(self, weights: Mapping[str, float]) -> Dict[str, int]:
        """Count every term of a weight table."""
        return {term: self.count_keyword(term) for term in weights}

    def contributions(self, weights: Mapping[str, float]) -> Dict[str, float]:
        """Score contribution (count x weight) of every term."""
        return {
            term: self.count_keyword(term) * weight
            for term, weight in weights.items()
        }

    def weighted_score(self, weights: Mapping[str, float]) -> float:
        """
        Calculate the weighted keyword score.

        Args:
            weights: Term to weight mapping

        Returns:
            Sum of count x weight over all terms
        """
        total = 0.0
        for term, weight in weights.items():
            total += self.count_keyword(term) * weight
        return total

    def top_keywords(self, weights: Mapping[str, float], top_n: int = 3) -> List[str]:
        """Terms with the most occurrences; ties keep weight table order."""
        if top_n <= 0:
            return []

        counts = self.count_all(weights)
        ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [term for term, _ in ordered[:top_n]]

    def generate_hashtags(self, weights: Mapping[str, float], top_n: int = 3) -> str:
        """Build a hashtag string such as '#舒芙蕾 #不限時'."""
        return " ".join(f"#{term}" for term in self.top_keywords(weights, top_n))

    def clear_cache(self) -> None:
        """Drop cached counts."""
        self._counts.clear()

    @property
    def content_length(self) -> int:
        return len(self.content)
