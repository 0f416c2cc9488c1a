"""
Unit Tests for Message Normalizer

Tests informal-spelling substitutions and dual-form matching.
"""

import pytest

from haven.services.safety.normalizer import MatchText, normalize


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("im gonna end it", "i am going to end it"),
            ("I WANNA DIE", "i want to die"),
            ("u dont care", "you don't care"),
            ("i cant do this", "i can't do this"),
            ("ur not listening", "your not listening"),
            ("my lyfe is over", "my life is over"),
            ("thinking about suicied", "thinking about suicide"),
            ("going 2 bed", "going to bed"),
        ],
    )
    def test_substitutions(self, text: str, expected: str) -> None:
        """Test each informal form maps to its canonical spelling."""
        assert normalize(text) == expected

    def test_substitutions_respect_token_boundaries(self) -> None:
        """Test substitutions never rewrite parts of longer words."""
        assert normalize("unusual 2023 impulse") == "unusual 2023 impulse"

    @pytest.mark.parametrize("text", ["", "   ", "😢😢", "\n\t", "x" * 5000])
    def test_total_over_odd_input(self, text: str) -> None:
        """Test normalize never raises."""
        assert isinstance(normalize(text), str)


class TestMatchText:
    """Tests for MatchText."""

    def test_phrase_found_in_normalized_form(self) -> None:
        """Test a phrase only present after normalization is found."""
        text = MatchText.from_message("im gonna do it tonight")

        assert text.contains("going to")
        assert "going to" not in text.raw

    def test_phrase_found_in_raw_form(self) -> None:
        """Test a phrase present only before normalization is found."""
        text = MatchText.from_message("u know")

        assert text.contains("u know")
        assert not text.contains("nothing")

    def test_matches_preserves_input_order(self) -> None:
        """Test matches returns phrases in the order given."""
        text = MatchText.from_message("Alone and hopeless")

        assert text.matches(("hopeless", "trapped", "alone")) == ["hopeless", "alone"]
