"""
Renderer for markdown-it that outputs call expressions instead of HTML

Each token becomes indented call-expression text, e.g.

    h1({},
      "Hello",
    ),
    p({},
      "A ",
      createElement(Foo, {a: "1"}),
    )

The output is the body of a function: a comma-and-newline separated list of
expressions. Opening tokens leave their call open (`p({}`) and raise the
indent; the matching closing token lowers it again and emits `)`.

Rendering state (indent level and the set of element names used) lives in
a RenderState created per render() call and passed to every rule, so one
JSXRenderer can be reused and its rules tested in isolation. The caller uses
RenderState.tags to bind a factory for each element name.
"""

import json
import re
from typing import Any, Callable, Dict, List, MutableMapping, Optional, Sequence, Tuple, Union

from markdown_it.common.utils import unescapeAll
from markdown_it.token import Token

from ..models.render import JSXExpression
from ..models.state import RenderState
from .log import LOG


RuleResult = Union[str, List[str]]
Rule = Callable[..., RuleResult]

ATTR_NAMES: Dict[str, str] = {
    'class': 'className',
}


def camelize(name: str) -> str:
    """
    Convert an element name to the identifier convention of the output

    Example:
        >>> camelize("code_block")
        'codeBlock'
    """
    return re.sub(r'_(.)', lambda match: match.group(1).upper(), name)


def json_quote(value: str) -> str:
    """JSON string literal, non-ASCII kept as-is"""
    return json.dumps(value, ensure_ascii=False)


def option_get(options: Any, name: str, default: Any = None) -> Any:
    """Read an option from an OptionsDict or a plain mapping"""
    if options is None:
        return default
    return options.get(name, default)


def code_inline(tokens, idx, options, env, renderer, state):
    return renderer.element_render(tokens[idx], state, json_quote(tokens[idx].content))


def code_block(tokens, idx, options, env, renderer, state):
    return renderer.element_render(tokens[idx], state, json_quote(tokens[idx].content))


def fence(tokens, idx, options, env, renderer, state):
    token = tokens[idx]
    info = unescapeAll(token.info).strip() if token.info else ''
    langName = info.split()[0] if info else ''

    highlight = option_get(options, 'highlight')
    if highlight:
        highlighted = highlight(token.content, langName) or token.content
    else:
        highlighted = token.content

    # A complete <pre> block is still only a quoted string child
    if highlighted.startswith('<pre'):
        return renderer.element_render(token, state, json_quote(highlighted))

    # Rendered under the token's own tag (code), not as a codeBlock element;
    # indented code and fences share one element name on purpose
    if info:
        # Inject the class on a copy, the token itself stays untouched
        attrs = dict(token.attrs)
        langClass = option_get(options, 'langPrefix', '') + langName
        if 'class' in attrs:
            attrs['class'] = f"{attrs['class']} {langClass}"
        else:
            attrs['class'] = langClass

        return renderer.element_render(token.copy(attrs=attrs), state, json_quote(highlighted))

    return renderer.element_render(token, state, json_quote(highlighted))


def image(tokens, idx, options, env, renderer, state):
    token = tokens[idx]

    # "alt" attr MUST be set, even if empty, and always reflects the children
    token.attrs['alt'] = renderer.inlineText_render(token.children or [], options, env)

    return renderer.token_render(tokens, idx, options, env, state)


def hardbreak(tokens, idx, options, env, renderer, state):
    state.tags.add('br')
    return renderer.indent_apply('br({})', state)


def softbreak(tokens, idx, options, env, renderer, state):
    if option_get(options, 'breaks', False):
        return hardbreak(tokens, idx, options, env, renderer, state)
    return []


def text(tokens, idx, options, env, renderer, state):
    return renderer.indent_apply(json_quote(tokens[idx].content), state)


def jsx_block(tokens, idx, options, env, renderer, state):
    return renderer.indent_apply(tokens[idx].content.strip(), state)


def jsx_inline(tokens, idx, options, env, renderer, state):
    nesting = tokens[idx].nesting
    if nesting == -1:
        state.indent_pop()
    result = renderer.indent_apply(tokens[idx].content.strip(), state)
    if nesting == 1:
        state.indent_push()
    return result


DEFAULT_RULES: Dict[str, Rule] = {
    'code_inline': code_inline,
    'code_block': code_block,
    'fence': fence,
    'image': image,
    'hardbreak': hardbreak,
    'softbreak': softbreak,
    'text': text,
    'jsx_block': jsx_block,
    'jsx_inline': jsx_inline,
}


class JSXRenderer:
    """
    markdown-it renderer producing call-expression source text

    Rules are looked up by token type in ``self.rules`` and called as

        rule(tokens, idx, options, env, renderer, state) -> str | list[str]

    Tokens without a rule go through token_render(), which turns an
    open/attrs/close triple into ``name({...attrs}, ...children)``.

    Example:
        >>> md = MarkdownIt(renderer_cls=JSXRenderer)
        >>> md.renderer.rules['strong_open'] = (
        ...     lambda tokens, idx, options, env, renderer, state:
        ...         renderer.indent_apply('b({}', state))
    """

    __output__ = "jsx"

    def __init__(self, parser: Any = None) -> None:
        self.rules: Dict[str, Rule] = dict(DEFAULT_RULES)

    def result_push(self, results: List[str], result: RuleResult) -> None:
        """Append a rule result, dropping blank lines"""
        if isinstance(result, list):
            results.extend(line for line in result if line.strip())
        elif isinstance(result, str) and result.strip():
            results.append(result)

    def indent_apply(self, text: str, state: RenderState) -> str:
        """Prefix every line of text with the current indent"""
        prefix = ' ' * state.indent_level
        return '\n'.join(prefix + line for line in text.split('\n'))

    def attrs_render(self, token: Token) -> str:
        """
        Render token attributes as an object literal

        Example:
            {"className": "lead", "id": "intro"}
        """
        parts = []
        for name, value in (token.attrs or {}).items():
            key = ATTR_NAMES.get(name, name)
            if isinstance(value, JSXExpression):
                rendered = value.code
            else:
                rendered = json.dumps(value, ensure_ascii=False)
            parts.append(f"{json_quote(key)}: {rendered}")
        return '{' + ', '.join(parts) + '}'

    def element_render(self, token: Token, state: RenderState, *children: str) -> str:
        """
        Render a complete element call with the given children

        Args:
            token: Token providing the tag and attributes
            state: Render context (records the tag name)
            *children: Already rendered child expressions

        Returns:
            Indented ``name({...}, child, ...)`` text
        """
        args = [self.attrs_render(token)] + list(children)
        name = camelize(token.tag)
        state.tags.add(name)
        return self.indent_apply(f"{name}({', '.join(args)})", state)

    def token_render(
        self,
        tokens: Sequence[Token],
        idx: int,
        options: Any,
        env: Optional[MutableMapping],
        state: RenderState,
    ) -> RuleResult:
        """
        Default token renderer

        - hidden tokens (tight list paragraphs) render as nothing
        - closing tokens dedent and emit ')'
        - opening tokens emit ``name({...}`` and indent their children
        - self-closing tokens emit ``name({...})``
        """
        token = tokens[idx]

        # Tight list paragraphs
        if token.hidden:
            return []

        if token.nesting == -1:
            state.indent_pop()
            return self.indent_apply(')', state)

        name = camelize(token.tag)
        state.tags.add(name)

        # Add token name and attributes, e.g. `img({"src": "foo"}`
        result = self.indent_apply(f"{name}(", state) + self.attrs_render(token)

        # Close the call for self-closing tags, e.g. `img({"src": "foo"})`
        if token.nesting == 0:
            result += ')'
        else:
            state.indent_push()

        return result

    def inline_render(
        self,
        tokens: Sequence[Token],
        options: Any,
        env: Optional[MutableMapping],
        state: RenderState,
    ) -> List[str]:
        """The same as document rendering, for the children of an inline token"""
        results: List[str] = []

        for i, token in enumerate(tokens):
            rule = self.rules.get(token.type)
            if rule is not None:
                self.result_push(results, rule(tokens, i, options, env, self, state))
            else:
                self.result_push(results, self.token_render(tokens, i, options, env, state))

        return results

    def inlineText_render(
        self, tokens: Sequence[Token], options: Any, env: Optional[MutableMapping]
    ) -> str:
        """
        Flatten inline tokens to plain text

        Only text tokens and (recursively) images contribute; used for the
        alt attribute of images.
        """
        result = ''

        for token in tokens:
            if token.type == 'text':
                result += token.content
            elif token.type == 'image':
                result += self.inlineText_render(token.children or [], options, env)

        return result

    def document_render(
        self, tokens: Sequence[Token], options: Any, env: Optional[MutableMapping]
    ) -> Tuple[str, RenderState]:
        """
        Render a block token stream and return the render context with it

        Args:
            tokens: Block tokens from MarkdownIt.parse()
            options: Parser options (breaks, langPrefix, highlight, initialIndent)
            env: Parse environment

        Returns:
            (body text, RenderState with the element names used)
        """
        state = RenderState(indent_level=option_get(options, 'initialIndent', 0) or 0)
        start_indent = state.indent_level
        results: List[str] = []

        for i, token in enumerate(tokens):
            if token.type == 'inline':
                if token.children:
                    self.result_push(results, self.inline_render(token.children, options, env, state))
            elif token.type in self.rules:
                self.result_push(results, self.rules[token.type](tokens, i, options, env, self, state))
            else:
                self.result_push(results, self.token_render(tokens, i, options, env, state))

        if state.indent_level != start_indent:
            LOG(f"Indent ended at {state.indent_level}, started at {start_indent}", level=2)

        return ',\n'.join(results), state

    def render(
        self, tokens: Sequence[Token], options: Any, env: Optional[MutableMapping]
    ) -> str:
        """
        Takes token stream and generates call-expression source text

        The element names used are published as ``env["tags"]``.
        """
        body, state = self.document_render(tokens, options, env)
        if env is not None:
            env['tags'] = state.tags
        return body
