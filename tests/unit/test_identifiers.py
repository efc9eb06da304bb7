"""Tests for the composite identifier codec."""

from __future__ import annotations

import pytest

from resource_provider.exceptions import DecodeError, EmptyPrimaryKeyError, WrongArityError
from resource_provider.identifiers import decode, encode


class TestEncode:
    """Test cases for encode."""

    def test_joins_parts(self):
        """Test the documented three-part example."""
        assert encode(["my-bucket.4000", "123456789012", "private"], ",") == "my-bucket.4000,123456789012,private"

    def test_empty_optional_parts_are_positional(self):
        """Test that empty trailing parts are still emitted."""
        assert encode(["example", "", ""], ",") == "example,,"

    def test_single_part(self):
        """Test encoding a single-part identifier."""
        assert encode(["arn:aws:imagebuilder:us-east-1:123456789012:distribution-configuration/x"], ",") == (
            "arn:aws:imagebuilder:us-east-1:123456789012:distribution-configuration/x"
        )

    def test_rejects_separator_inside_part(self):
        """Test that a part containing the separator is refused."""
        with pytest.raises(ValueError):
            encode(["a|b", "c"], "|")

    def test_rejects_no_parts(self):
        """Test that at least one part is required."""
        with pytest.raises(ValueError):
            encode([], ",")


class TestDecode:
    """Test cases for decode."""

    def test_decodes_fixed_arity(self):
        """Test decoding the documented three-part example."""
        assert decode("my-bucket.4000,123456789012,private", ",", {3}) == (
            "my-bucket.4000",
            "123456789012",
            "private",
        )

    def test_pads_missing_optional_parts(self):
        """Test that shorter accepted arities are padded with empty strings."""
        assert decode("my-bucket.4000,123456789012", ",", {1, 2, 3}) == (
            "my-bucket.4000",
            "123456789012",
            "",
        )

    def test_single_part_padded(self):
        """Test that a bare primary key is padded to the widest arity."""
        assert decode("example", ",", {1, 2, 3}) == ("example", "", "")

    def test_rejects_empty_string(self):
        """Test that the empty identifier is rejected."""
        with pytest.raises(WrongArityError):
            decode("", ",", {1, 2, 3})

    @pytest.mark.parametrize("identifier", ["a", "a|b|c", "a|b|c|d"])
    def test_rejects_wrong_arity(self, identifier):
        """Test that part counts outside the accepted set are rejected."""
        with pytest.raises(WrongArityError) as exc_info:
            decode(identifier, "|", {2})
        assert exc_info.value.accepted_arities == frozenset({2})

    @pytest.mark.parametrize("identifier", [",123456789012", ",123456789012,private", ",,"])
    def test_rejects_empty_primary_key(self, identifier):
        """Test that an empty first part is rejected regardless of the rest."""
        with pytest.raises(EmptyPrimaryKeyError):
            decode(identifier, ",", {1, 2, 3})

    @pytest.mark.parametrize("identifier", [None, 42, b"bucket", ["bucket"]])
    def test_non_string_input_is_a_decode_error(self, identifier):
        """Test that decode stays total for non-string input."""
        with pytest.raises(DecodeError):
            decode(identifier, ",", {1})

    def test_decode_errors_are_value_errors(self):
        """Test that decode errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode("", ",", {1})


class TestRoundTrip:
    """Round-trip checks for representative identifiers."""

    @pytest.mark.parametrize(
        "parts,separator,arities",
        [
            (("example.com", "policy-1"), "|", {2}),
            (("my-example.bucket.4000", "123456789012", "public-read-write"), ",", {1, 2, 3}),
            (("bucket", "", ""), ",", {1, 2, 3}),
        ],
    )
    def test_round_trip(self, parts, separator, arities):
        """Test that decode(encode(parts)) returns the parts."""
        assert decode(encode(list(parts), separator), separator, arities) == parts
