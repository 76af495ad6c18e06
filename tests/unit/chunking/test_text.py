import pytest

from contract_kit.chunking.text import estimate_tokens, sanitize_text


class TestSanitizeText:
    def test_empty(self) -> None:
        assert sanitize_text("") == ""

    def test_removes_control_characters_but_keeps_newlines(self) -> None:
        assert sanitize_text("Buyer\x00 pays\x07\nSeller") == "Buyer pays\nSeller"

    def test_removes_byte_order_mark(self) -> None:
        assert sanitize_text("\ufeffPURCHASE AGREEMENT") == "PURCHASE AGREEMENT"

    def test_unifies_line_endings(self) -> None:
        assert sanitize_text("one\r\ntwo\rthree") == "one\ntwo\nthree"

    def test_collapses_whitespace(self) -> None:
        text = "Price:\t\t$500,000   due\n\n\n\n\nat closing"

        assert sanitize_text(text) == "Price: $500,000 due\n\nat closing"

    def test_applies_nfkc(self) -> None:
        """Compatibility ligatures from PDF extraction become plain letters."""
        assert sanitize_text("\ufb01nancing") == "financing"

    def test_strips(self) -> None:
        assert sanitize_text("  \n terms \n ") == "terms"


class TestEstimateTokens:
    def test_ratio(self) -> None:
        assert estimate_tokens("x" * 300, 3.0) == 100.0

    def test_empty(self) -> None:
        assert estimate_tokens("", 4.0) == 0.0

    def test_raises_on_non_positive_ratio(self) -> None:
        with pytest.raises(ValueError, match="chars_per_token must be > 0"):
            estimate_tokens("text", 0)
