"""
Tests for override token classification.
"""

import pytest
from hypothesis import given, strategies as st

from xdiff.core.exceptions import InvalidOverride
from xdiff.request.overrides import Override, OverrideKind, OverrideSet, parse_override


class TestParseOverride:
    """Tests for classifying single tokens."""

    def test_parse_header_query_and_body(self):
        """Test that sigils select the override kind and are stripped."""
        tokens = ["%Content-Type=application/json", "id=1", "@name=misky"]

        overrides = [parse_override(token) for token in tokens]

        assert overrides == [
            Override(OverrideKind.HEADER, "Content-Type", "application/json"),
            Override(OverrideKind.QUERY, "id", "1"),
            Override(OverrideKind.BODY, "name", "misky"),
        ]

    def test_whitespace_is_trimmed(self):
        override = parse_override("  page =  2 ")
        assert override.key == "page"
        assert override.value == "2"

    def test_splits_on_first_equals_only(self):
        override = parse_override("q=a=b")
        assert override.key == "q"
        assert override.value == "a=b"

    def test_empty_value_is_allowed(self):
        assert parse_override("@note=").value == ""

    @pytest.mark.parametrize("token", ["novalue", "=value", "%=value", "@ =x", "1id=2", "-x=1", "#a=b", "%X Bad=1", "%X:A=1"])
    def test_invalid_tokens_raise(self, token):
        with pytest.raises(InvalidOverride, match="Invalid key value pair"):
            parse_override(token)

    def test_error_names_token(self):
        with pytest.raises(InvalidOverride) as excinfo:
            parse_override("!x=1")
        assert excinfo.value.details["token"] == "!x=1"

    @pytest.mark.parametrize("token", ["%X-A=a\r\nInjected: 1", "%X-A=a\nb"])
    def test_header_value_with_line_break_raises(self, token):
        with pytest.raises(InvalidOverride, match="control character") as excinfo:
            parse_override(token)
        assert excinfo.value.details["token"] == token

    def test_header_name_with_space_names_token(self):
        with pytest.raises(InvalidOverride, match="invalid header name") as excinfo:
            parse_override("%X Bad=1")
        assert excinfo.value.details["token"] == "%X Bad=1"

    def test_query_and_body_keys_are_not_header_checked(self):
        assert parse_override("a b=1").key == "a b"
        assert parse_override("@a b=x\ny").value == "x\ny"


@given(
    first=st.characters().filter(lambda c: not c.isalpha() and not c.isspace() and c not in "%@="),
    rest=st.text(alphabet=st.characters(blacklist_characters="="), max_size=10),
    value=st.text(max_size=10),
)
def test_unrecognized_leading_character_always_fails(first, rest, value):
    """Any key starting with a character other than %, @ or a letter is rejected."""
    with pytest.raises(InvalidOverride):
        parse_override(f"{first}{rest}={value}")


class TestOverrideSet:
    """Tests for grouping overrides by kind."""

    def test_groups_preserve_input_order(self):
        overrides = OverrideSet.from_tokens(["b=2", "%X-A=1", "a=1", "@k=v", "%X-B=2"])

        assert overrides.query == [("b", "2"), ("a", "1")]
        assert overrides.headers == [("X-A", "1"), ("X-B", "2")]
        assert overrides.body == [("k", "v")]

    def test_iteration_applies_headers_first(self):
        kinds = [kind for kind, _ in OverrideSet.from_tokens(["a=1", "@b=2"])]
        assert kinds == [OverrideKind.HEADER, OverrideKind.QUERY, OverrideKind.BODY]

    def test_is_empty(self):
        assert OverrideSet().is_empty()
        assert not OverrideSet.from_tokens(["a=1"]).is_empty()

    def test_invalid_token_fails_whole_set(self):
        with pytest.raises(InvalidOverride):
            OverrideSet.from_tokens(["a=1", "?b=2"])
