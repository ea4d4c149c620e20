"""
Tag grammar tests

Tests the open / close / self-close recognizers for both flavors and the
low-level scanners they share with the transformer.
"""

import pytest

from mdjsx.lib.grammar import (
    BLOCK_GRAMMAR,
    INLINE_GRAMMAR,
    brace_findMatching,
    string_skip,
    tag_scan,
)


class TestBraceMatching:
    """Test brace_findMatching depth tracking"""

    def test_simple_braces(self):
        """Single pair of braces"""
        assert brace_findMatching("{abc}", 0) == 4

    def test_nested_braces(self):
        """Inner braces do not close the outer one"""
        text = "{a {b {c}} d}"
        assert brace_findMatching(text, 0) == len(text) - 1

    def test_braces_inside_strings(self):
        """Braces inside string literals are ignored"""
        text = '{a ? "}" : {b: 1}}'
        assert brace_findMatching(text, 0) == 17

    def test_braces_inside_template_literal(self):
        """Template literals may contain braces and newlines"""
        text = "{`x}\n{`}"
        assert brace_findMatching(text, 0) == len(text) - 1

    def test_braces_inside_comment(self):
        """Block comments are skipped"""
        text = "{/* } */ x}"
        assert brace_findMatching(text, 0) == len(text) - 1

    def test_unmatched_brace_raises(self):
        """Running out of text is a syntax error"""
        with pytest.raises(SyntaxError, match="Unmatched brace"):
            brace_findMatching("{a {b}", 0)


class TestStringSkip:
    """Test string literal skipping"""

    def test_escaped_quote(self):
        """Escaped quotes do not end the string"""
        text = r'"a\"b" rest'
        assert string_skip(text, 0) == 6

    def test_unterminated_string(self):
        """Plain strings may not span lines"""
        with pytest.raises(SyntaxError, match="Unterminated string"):
            string_skip('"abc\ndef"', 0)


class TestTagScan:
    """Test tag_scan on opening and self-closing tags"""

    def test_open_tag(self):
        """Opening tag reports name, end and not self-closing"""
        assert tag_scan('<Foo a="1">x') == ("Foo", 11, False)

    def test_self_closing_tag(self):
        """Self-closing tag"""
        assert tag_scan("<br/>") == ("br", 5, True)

    def test_gt_inside_expression_attribute(self):
        """A '>' inside a brace attribute does not end the tag"""
        text = "<Foo cond={a > b}>x</Foo>"
        assert tag_scan(text) == ("Foo", 18, False)

    def test_spread_attribute(self):
        """Spread attributes are accepted"""
        assert tag_scan("<Foo {...props} />") == ("Foo", 18, True)

    def test_member_and_namespace_names(self):
        """Dotted and namespaced names"""
        assert tag_scan("<Foo.Bar/>")[0] == "Foo.Bar"
        assert tag_scan("<svg:rect/>")[0] == "svg:rect"

    def test_not_a_tag(self):
        """Text that is not a well-formed tag"""
        assert tag_scan("< Foo>") is None
        assert tag_scan("<1>") is None
        assert tag_scan('<Foo a="1') is None
        assert tag_scan("<Foo a=1>") is None


class TestInlineGrammar:
    """Test the inline flavor"""

    def test_open_tag_with_trailing_text(self):
        """Anything may follow the opening tag"""
        match = INLINE_GRAMMAR.tagOpen_parse('<Foo a="1">hi</Foo>')
        assert match.status
        assert match.name == "Foo"
        assert match.end == 11

    def test_self_closing_counts_as_open(self):
        """Self-closing tags are also opening tags"""
        match = INLINE_GRAMMAR.tagOpen_parse("<Bar/> tail")
        assert match.status
        assert match.name == "Bar"
        assert match.end == 6

    def test_brace_expression(self):
        """Brace expressions are self-closing constructs without a name"""
        match = INLINE_GRAMMAR.tagSelfClose_parse("{x} rest")
        assert match.status
        assert match.name is None
        assert match.end == 3

    def test_self_close_rejects_open_tag(self):
        """An opening tag is not self-closing"""
        assert not INLINE_GRAMMAR.tagSelfClose_parse("<Foo>x</Foo>").status

    def test_self_close_allows_trailing_text(self):
        """Inline self-closing tags may be followed by text"""
        assert INLINE_GRAMMAR.tagSelfClose_parse("<Bar/> and more").status

    def test_close_tag(self):
        """Closing tag at the start of text"""
        match = INLINE_GRAMMAR.tagClose_parse("</Foo> tail")
        assert match.status
        assert match.name == "Foo"
        assert match.end == 6

    def test_close_tag_not_at_start(self):
        """Closing tags must start the text"""
        assert not INLINE_GRAMMAR.tagClose_parse("x</Foo>").status

    def test_unbalanced_brace(self):
        """Unterminated brace expression is no match"""
        assert not INLINE_GRAMMAR.tagOpen_parse("{x").status


class TestBlockGrammar:
    """Test the block flavor"""

    def test_open_tag_starts_line(self):
        """Opening tag only has to start the line"""
        match = BLOCK_GRAMMAR.tagOpen_parse("<Foo>some text")
        assert match.status
        assert match.name == "Foo"

    def test_self_close_must_fill_line(self):
        """Self-closing tag followed by text is not a block self-close"""
        assert BLOCK_GRAMMAR.tagSelfClose_parse("<Foo />").status
        assert BLOCK_GRAMMAR.tagSelfClose_parse("<Foo />  ").status
        assert not BLOCK_GRAMMAR.tagSelfClose_parse("<Foo /> trailing").status

    def test_brace_expression_not_a_block(self):
        """Brace expressions are an inline-only construct"""
        assert not BLOCK_GRAMMAR.tagOpen_parse("{x}").status
        assert not BLOCK_GRAMMAR.tagSelfClose_parse("{x}").status

    def test_close_tag(self):
        """Closing tag recognized with surrounding whitespace inside"""
        match = BLOCK_GRAMMAR.tagClose_parse("</Foo >")
        assert match.status
        assert match.name == "Foo"
