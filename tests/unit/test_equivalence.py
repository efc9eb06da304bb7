"""Tests for policy document equivalence."""

from __future__ import annotations

import json

import pytest

from resource_provider.equivalence import (
    EquivalenceCheckFailure,
    canonical_json,
    canonicalize,
    policies_equivalent,
)


class TestPoliciesEquivalent:
    """Test cases for policies_equivalent."""

    def test_key_and_array_reordering_is_equivalent(self):
        """Test the documented reordering example."""
        a = '{"Version":"2012-10-17","Statement":[{"Action":["A","B"]}]}'
        b = '{"Statement":[{"Action":["B","A"]}],"Version":"2012-10-17"}'
        assert policies_equivalent(a, b)

    def test_changed_action_is_not_equivalent(self):
        """Test that a changed value is detected."""
        a = '{"Version":"2012-10-17","Statement":[{"Action":["A","B"]}]}'
        b = '{"Version":"2012-10-17","Statement":[{"Action":["A","C"]}]}'
        assert not policies_equivalent(a, b)

    def test_singleton_array_equals_scalar(self):
        """Test that ["x"] and "x" compare equal."""
        a = {"Statement": [{"Effect": "Allow", "Action": ["ses:SendEmail"], "Resource": "*"}]}
        b = {"Statement": {"Effect": "Allow", "Action": "ses:SendEmail", "Resource": ["*"]}}
        assert policies_equivalent(a, b)

    def test_mixed_string_and_object(self):
        """Test comparing a JSON string with a parsed document."""
        document = {"Version": "2012-10-17", "Statement": [{"Sid": "1", "Effect": "Allow"}]}
        assert policies_equivalent(json.dumps(document, indent=2), document)

    def test_statement_reordering_is_equivalent(self):
        """Test that statement order does not matter."""
        s1 = {"Sid": "1", "Effect": "Allow", "Action": "ses:SendEmail"}
        s2 = {"Sid": "2", "Effect": "Deny", "Action": "ses:SendRawEmail"}
        assert policies_equivalent({"Statement": [s1, s2]}, {"Statement": [s2, s1]})

    def test_malformed_falls_back_to_string_comparison(self):
        """Test that unparseable documents are compared as strings."""
        assert policies_equivalent("{not json", "{not json")
        assert not policies_equivalent("{not json", '{"Version":"2012-10-17"}')

    def test_malformed_bytes_fall_back(self):
        """Test fallback for byte documents."""
        assert policies_equivalent(b"{oops", "{oops")


class TestCanonicalForm:
    """Test cases for canonicalization helpers."""

    def test_canonicalize_sorts_keys_and_arrays(self):
        """Test canonical ordering."""
        assert canonicalize({"b": [3, 1, 2], "a": ["x"]}) == {"a": "x", "b": [1, 2, 3]}

    def test_canonical_json_raises_on_invalid(self):
        """Test that invalid JSON raises EquivalenceCheckFailure."""
        with pytest.raises(EquivalenceCheckFailure):
            canonical_json("{")
