"""Tests for input validation."""

import pytest  # type: ignore[import-not-found]

from timetracker.core.models import Project
from timetracker.core.validation import is_valid_choice, is_valid_name

CHOICES = [Project("Alpha"), Project("Beta"), Project("Gamma")]


class TestIsValidChoice:
    """Test is_valid_choice."""

    @pytest.mark.parametrize("value,expected", [("1", 0), ("2", 1), ("3", 2)])
    def test_selects_one_based_index(self, value: str, expected: int) -> None:
        """Test that numbers select items counting from 1."""
        assert is_valid_choice(CHOICES, value) is CHOICES[expected]

    def test_surrounding_whitespace_and_sign_accepted(self) -> None:
        """Test that padded and signed numbers still parse."""
        assert is_valid_choice(CHOICES, " 2 ") is CHOICES[1]
        assert is_valid_choice(CHOICES, "+3") is CHOICES[2]

    @pytest.mark.parametrize("value", ["0", "4", "-1", "-3", "100", "1" * 5000])
    def test_out_of_range_is_no_match(self, value: str) -> None:
        """Test that numbers outside 1..len never select anything."""
        assert is_valid_choice(CHOICES, value) is None

    @pytest.mark.parametrize("value", ["", "   ", "Alpha", "1.0", "1_0", "one", "1a"])
    def test_non_numeric_is_no_match(self, value: str) -> None:
        """Test that non-numeric input never selects anything."""
        assert is_valid_choice(CHOICES, value) is None

    def test_non_numeric_and_out_of_range_are_indistinguishable(self) -> None:
        """Test that both failure kinds produce the same result."""
        assert is_valid_choice(CHOICES, "Delta") == is_valid_choice(CHOICES, "9")

    def test_empty_choices(self) -> None:
        """Test that nothing can be selected from an empty list."""
        assert is_valid_choice((), "1") is None

    def test_works_with_tuples(self) -> None:
        """Test selection from a tuple as returned by storage."""
        assert is_valid_choice(tuple(CHOICES), "1") is CHOICES[0]


class TestIsValidName:
    """Test is_valid_name."""

    @pytest.mark.parametrize("value", ["", " ", "\t", "  \n "])
    def test_blank_names_rejected(self, value: str) -> None:
        """Test that empty and whitespace-only names are rejected."""
        assert is_valid_name(value) is None

    def test_none_rejected(self) -> None:
        """Test that a missing value is rejected."""
        assert is_valid_name(None) is None

    def test_name_returned_verbatim(self) -> None:
        """Test that valid names are not trimmed."""
        assert is_valid_name(" a ") == " a "
        assert is_valid_name("Alpha") == "Alpha"

    def test_numeric_name_allowed(self) -> None:
        """Test that a number is a valid name."""
        assert is_valid_name("42") == "42"
