"""
Inline scanner tests

Tests the jsx_inline rule: self-closing constructs, paired elements whose
body is parsed as inline Markdown, and cursor restoration on failure.
"""

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

from mdjsx.lib.inline import jsx_inline, jsxContent_find
from mdjsx.lib.plugin import markdown_make


def children_get(md, src):
    """Inline children of the first paragraph"""
    tokens = md.parse(src)
    return tokens[1].children


def jsx_tokens(children):
    return [token for token in children if token.type == "jsx_inline"]


def state_make(src: str, md=None) -> StateInline:
    """Fresh inline state over src"""
    return StateInline(src, md or markdown_make(), {}, [])


class TestSelfClosing:
    """Test single-token constructs"""

    def test_brace_expression(self, md):
        """{x} becomes one token with content x"""
        children = children_get(md, "{x}")

        assert len(children) == 1
        assert children[0].type == "jsx_inline"
        assert children[0].nesting == 0
        assert children[0].content == "x"

    def test_self_closing_element(self, md):
        """Text around a self-closing element is kept"""
        children = children_get(md, 'Hello <Name first="Ada"/>!')

        assert [token.type for token in children] == ["text", "jsx_inline", "text"]
        assert children[1].content == 'createElement(Name, {first: "Ada"})'

    def test_cursor_after_construct(self):
        """The cursor moves exactly past the tag"""
        state = state_make("a <Foo/> b")
        state.pos = 2

        assert jsx_inline(state, False)
        assert state.pos == 8
        assert len(state.tokens) == 1

    def test_silent_mode_pushes_nothing(self):
        """Validation mode advances without tokens"""
        state = state_make("<Foo/> b")

        assert jsx_inline(state, True)
        assert state.pos == 6
        assert state.tokens == []

    def test_empty_body(self, md):
        """A paired element with an empty body is one token"""
        children = jsx_tokens(children_get(md, "a <Foo></Foo> b"))

        assert len(children) == 1
        assert children[0].nesting == 0
        assert children[0].content == "createElement(Foo, null)"


class TestPaired:
    """Test paired elements with Markdown bodies"""

    def test_open_body_close(self, md):
        """Opening token, body tokens, closing token"""
        children = children_get(md, 'x <Foo a="1">hi *there*</Foo>!')
        types = [token.type for token in children]

        assert types[0] == "text"
        assert types[-1] == "text"
        assert "em_open" in types

        opened, closed = jsx_tokens(children)
        assert opened.nesting == 1
        assert opened.content == 'createElement(Foo, {a: "1"}'
        assert closed.nesting == -1
        assert closed.content == ")"
        assert types.index("jsx_inline") < types.index("em_open")

    def test_nested_same_name(self, md):
        """Inner element of the same name is skipped when looking for the close"""
        children = jsx_tokens(children_get(md, "x <Foo>a <Foo>b</Foo> c</Foo>"))
        assert [token.nesting for token in children] == [1, 1, -1, -1]

    def test_close_inside_code_span(self, md):
        """A closing tag inside a code span does not close the element"""
        children = children_get(md, "x <Foo>`</Foo>` real</Foo>")
        types = [token.type for token in children]

        assert types == ["text", "jsx_inline", "code_inline", "text", "jsx_inline"]
        assert children[2].content == "</Foo>"

    def test_content_find(self):
        """Positions of the body end and the closing tag end"""
        state = state_make("<b>x</b> tail")

        assert jsxContent_find(state, 3, "b") == (4, 8)
        assert state.pos == 0


class TestRejection:
    """Test that rejected attempts restore the cursor"""

    def test_unclosed_element(self):
        """No closing tag in the run"""
        state = state_make("<Foo>never closed")
        posMax = state.posMax

        assert not jsx_inline(state, False)
        assert state.pos == 0
        assert state.posMax == posMax
        assert state.tokens == []

    def test_transform_failure(self):
        """A transform returning None rejects the construct"""
        state = state_make("<Foo/> x")

        assert not jsx_inline(state, False, transform=lambda source: None)
        assert state.pos == 0
        assert state.tokens == []

    def test_second_character(self):
        """'<' followed by space or digit is plain text"""
        for src in ("< b", "<1>", "<"):
            state = state_make(src)
            assert not jsx_inline(state, False)
            assert state.pos == 0

    def test_less_than_stays_text(self, md):
        """Comparisons in prose survive as text"""
        children = children_get(md, "a < b and c<d")
        assert all(token.type == "text" for token in children)

    def test_plain_commonmark_instance(self):
        """The rule can be driven from an unextended parser"""
        state = state_make("{a}", MarkdownIt("commonmark"))
        assert jsx_inline(state, False)
        assert state.tokens[0].content == "a"
