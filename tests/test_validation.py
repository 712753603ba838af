"""Tests for tw_candidate.core.validation — property names, URI detection, value syntax."""

from tw_candidate.core.validation import (
    is_parsable_css_value,
    is_valid_arbitrary_value,
    is_valid_property_name,
    looks_like_uri,
)


class TestIsValidPropertyName:
    def test_lowercase(self):
        assert is_valid_property_name('background-color')

    def test_custom_property(self):
        assert is_valid_property_name('--my-var')

    def test_underscore(self):
        assert is_valid_property_name('_private')

    def test_uppercase_rejected(self):
        assert not is_valid_property_name('Color')

    def test_digit_rejected(self):
        assert not is_valid_property_name('1abc')


class TestIsValidArbitraryValue:
    def test_simple(self):
        assert is_valid_arbitrary_value('#bada55')
        assert is_valid_arbitrary_value('200px')

    def test_balanced_functions(self):
        assert is_valid_arbitrary_value('repeat(2,minmax(0,1fr))')

    def test_unbalanced_open(self):
        assert not is_valid_arbitrary_value('calc(1px')

    def test_unbalanced_close(self):
        assert not is_valid_arbitrary_value('a)b')

    def test_mismatched(self):
        assert not is_valid_arbitrary_value('(a]')

    def test_bracket_inside_quotes_ignored(self):
        assert is_valid_arbitrary_value('url("a)")')

    def test_unclosed_quote(self):
        assert not is_valid_arbitrary_value("'unclosed")

    def test_top_level_semicolon(self):
        assert not is_valid_arbitrary_value('red;color:blue')

    def test_semicolon_inside_brackets(self):
        assert is_valid_arbitrary_value('[a;b]')

    def test_escaped_semicolon(self):
        assert is_valid_arbitrary_value(r'a\;b')

    def test_empty(self):
        assert not is_valid_arbitrary_value('')


class TestIsParsableCssValue:
    def test_mixed_case_name(self):
        assert is_parsable_css_value('Color', 'red')

    def test_custom_property(self):
        assert is_parsable_css_value('--My-Var', '1px')

    def test_digit_name(self):
        assert not is_parsable_css_value('1abc', 'red')

    def test_braces_in_value(self):
        assert not is_parsable_css_value('Color', '{red}')

    def test_unbalanced_value(self):
        assert not is_parsable_css_value('Color', 'rgb(1,2,3')


class TestLooksLikeUri:
    def test_plain_url(self):
        assert looks_like_uri('http://example.com')

    def test_scheme_prefixed_url(self):
        assert looks_like_uri('src:https://example.com')

    def test_declaration(self):
        assert not looks_like_uri('background-color:red')

    def test_url_function(self):
        assert not looks_like_uri('background-image:url(https://example.com/a.png)')

    def test_no_host(self):
        assert not looks_like_uri('file:///etc/passwd')

    def test_malformed_is_recovered(self):
        assert not looks_like_uri('http://[::1')
