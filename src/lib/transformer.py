"""
Transformer from embedded JSX source to call-expression text

Converts one JSX element (or one {expression}) into the call expression a
JSX compiler would emit with a classic pragma:

    <Foo a="1">hello</Foo>   →   createElement(Foo, {a: "1"}, "hello")
    <p>hi {name}</p>         →   createElement("p", null, "hi ", name)
    {props.title}            →   props.title
    {ok && <b>yes</b>}       →   ok && createElement("b", null, "yes")

Anything that is not exactly one well-formed element or expression (with
optional surrounding whitespace and a trailing ';') is a failure. Scanners
rely on this strictness: "does the collected span transform?" is how they
decide where an embedded block ends.

Failures are reported as None from transform(); the reason is kept in
last_error and logged at debug verbosity.
"""

import html
import json
import re
from typing import Callable, List, Optional, Tuple

from .grammar import (
    ATTR_NAME_RE,
    CLOSE_TAG_RE,
    QUOTES,
    TAG_NAME_RE,
    brace_findMatching,
    string_skip,
    whitespace_skip,
)
from .log import LOG
from ..config import appsettings


IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][\w$]*$')
COMMENT_ONLY_RE = re.compile(r'^(\s*/\*.*?\*/\s*)*$', re.DOTALL)

# Characters after which a '<' opens an element instead of comparing
JSX_LEAD_CHARS = frozenset('([{,;:?=&|!~+-*%^')
JSX_LEAD_KEYWORD_RE = re.compile(r'(?:^|[^\w$.])(?:return|yield|default|case|else)$')


def text_clean(value: str) -> str:
    """
    Apply JSX whitespace rules to a text child

    Lines are trimmed (except the outer edges of the first and last line),
    lines that end up empty are dropped, and the rest are joined with a
    single space.

    Example:
        >>> text_clean("\\n  hello\\n  world  \\n")
        'hello world'
        >>> text_clean(" a b ")
        ' a b '
    """
    lines = value.replace('\r\n', '\n').split('\n')

    last_non_empty = 0
    for index, line in enumerate(lines):
        if line.strip(' \t'):
            last_non_empty = index

    result = ''
    for index, line in enumerate(lines):
        trimmed = line.replace('\t', ' ')
        if index != 0:
            trimmed = trimmed.lstrip(' ')
        if index != len(lines) - 1:
            trimmed = trimmed.rstrip(' ')
        if trimmed:
            if index != last_non_empty:
                trimmed += ' '
            result += trimmed

    return result


def jsxPosition_is(prefix: str) -> bool:
    """
    Whether a '<' following prefix starts an element

    Example:
        >>> jsxPosition_is("items.map(i => ")
        True
        >>> jsxPosition_is("a ")
        False
    """
    prefix = prefix.rstrip()
    if not prefix or prefix[-1] in JSX_LEAD_CHARS or prefix.endswith('=>'):
        return True
    return bool(JSX_LEAD_KEYWORD_RE.search(prefix))


def code_strip(code: str) -> str:
    """Strip surrounding whitespace and statement terminators"""
    return code.strip().strip(';').strip()


def key_render(name: str) -> str:
    """Object key for a prop name: bare identifier or JSON string"""
    if IDENTIFIER_RE.match(name):
        return name
    return json.dumps(name)


def elementType_render(name: str) -> str:
    """
    First argument of the element call

    Intrinsic elements (lowercase first letter, or names with '-' or ':')
    become strings; components stay identifiers.
    """
    if '-' in name or ':' in name or (name[0].islower() and '.' not in name):
        return json.dumps(name)
    return name


class JSXTransformer:
    """
    Recursive-descent compiler for a single embedded JSX construct

    Args:
        pragma: Function name used for element calls (defaults to
                appsettings.pragma, i.e. createElement)
    """

    def __init__(self, pragma: Optional[str] = None) -> None:
        self.pragma = pragma or appsettings.pragma
        self.last_error: Optional[str] = None

    def __call__(self, source: str) -> Optional[str]:
        return self.transform(source)

    def transform(self, source: str) -> Optional[str]:
        """
        Convert embedded JSX source into call-expression text

        Args:
            source: Raw JSX text (one element or one brace expression)

        Returns:
            Expression text, or None if source is not valid JSX
        """
        try:
            code = self.source_compile(source)
        except SyntaxError as e:
            self.last_error = str(e)
            LOG(f"JSX transform failed: {e}", level=3)
            return None

        self.last_error = None
        return code

    def source_compile(self, source: str) -> str:
        """
        Compile source, raising SyntaxError on anything unexpected

        Example:
            >>> JSXTransformer().source_compile('<br/>')
            'createElement("br", null)'
        """
        pos = whitespace_skip(source, 0)
        if pos >= len(source):
            raise SyntaxError("Empty source")

        if source[pos] == '{':
            end = brace_findMatching(source, pos)
            raw = source[pos + 1:end].strip()
            if not raw or COMMENT_ONLY_RE.match(raw):
                raise SyntaxError("Empty expression")
            code = self.expression_compile(source, pos + 1, end)
            pos = end + 1
        elif source[pos] == '<':
            code, pos = self.element_compile(source, pos)
        else:
            raise SyntaxError(f"Unexpected {source[pos]!r} at position {pos}")

        rest = source[pos:].strip()
        if rest and rest != ';':
            raise SyntaxError(f"Unexpected trailing content {rest[:20]!r}")

        return code

    def element_compile(self, source: str, pos: int) -> Tuple[str, int]:
        """
        Compile the element starting at pos

        Args:
            source: Full source text
            pos: Position of the element's '<'

        Returns:
            (expression, position just after the element)
        """
        name_match = TAG_NAME_RE.match(source, pos + 1)
        if not name_match:
            raise SyntaxError(f"Expected tag name at position {pos + 1}")
        name = name_match.group(0)

        props, pos, self_closing = self.attributes_compile(source, name_match.end())

        children: List[str] = []
        if not self_closing:
            children, pos = self.children_compile(source, pos, name)

        args = [elementType_render(name), props] + children
        return f"{self.pragma}({', '.join(args)})", pos

    def expression_compile(self, source: str, start: int, end: int) -> str:
        """
        Compile the JavaScript expression text source[start:end]

        Elements appearing where an expression may begin (after an
        operator, an opening bracket, '=>' or return) are compiled
        recursively, so no JSX survives into the output. String literals
        and block comments are copied untouched; a '<' anywhere else is a
        comparison.

        Example:
            >>> t = JSXTransformer()
            >>> t.expression_compile('{xs.map(x => <li>{x}</li>)}', 1, 26)
            'xs.map(x => createElement("li", null, x))'
        """
        parts: List[str] = []
        pos = start

        while pos < end:
            ch = source[pos]

            if ch in QUOTES:
                string_end = string_skip(source, pos)
                if string_end > end:
                    raise SyntaxError(f"Unterminated string at position {pos}")
                parts.append(source[pos:string_end])
                pos = string_end
                continue

            if source.startswith('/*', pos):
                comment_end = source.find('*/', pos + 2, end)
                if comment_end == -1:
                    raise SyntaxError(f"Unterminated comment at position {pos}")
                parts.append(source[pos:comment_end + 2])
                pos = comment_end + 2
                continue

            if ch == '<' and jsxPosition_is(''.join(parts)):
                if TAG_NAME_RE.match(source, pos + 1):
                    element, pos = self.element_compile(source, pos)
                    if pos > end:
                        raise SyntaxError(f"Element at position {pos} overruns its expression")
                    parts.append(element)
                    continue
                if source[pos + 1:pos + 2] in ('>', '/'):
                    raise SyntaxError(f"Unsupported JSX at position {pos}")

            parts.append(ch)
            pos += 1

        return ''.join(parts).strip()

    def attributes_compile(self, source: str, pos: int) -> Tuple[str, int, bool]:
        """
        Compile the attribute list of an opening tag

        Returns:
            (props object text or "null", position after the tag, self_closing)
        """
        props: List[str] = []

        while True:
            pos = whitespace_skip(source, pos)
            if pos >= len(source):
                raise SyntaxError("Unterminated tag")

            if source.startswith('/>', pos):
                pos += 2
                self_closing = True
                break
            if source[pos] == '>':
                pos += 1
                self_closing = False
                break

            if source[pos] == '{':
                end = brace_findMatching(source, pos)
                spread = source[pos + 1:end].strip()
                if not spread.startswith('...') or not spread[3:].strip():
                    raise SyntaxError(f"Expected spread attribute at position {pos}")
                props.append(self.expression_compile(source, pos + 1, end))
                pos = end + 1
                continue

            attr = ATTR_NAME_RE.match(source, pos)
            if not attr:
                raise SyntaxError(f"Unexpected {source[pos]!r} in tag at position {pos}")
            key = key_render(attr.group(0))
            pos = whitespace_skip(source, attr.end())

            if pos >= len(source) or source[pos] != '=':
                props.append(f"{key}: true")
                continue

            pos = whitespace_skip(source, pos + 1)
            if pos >= len(source):
                raise SyntaxError("Missing attribute value")

            if source[pos] in ('"', "'"):
                value_end = source.find(source[pos], pos + 1)
                if value_end == -1:
                    raise SyntaxError(f"Unterminated attribute value at position {pos}")
                value = html.unescape(source[pos + 1:value_end])
                props.append(f"{key}: {json.dumps(value, ensure_ascii=False)}")
                pos = value_end + 1
            elif source[pos] == '{':
                end = brace_findMatching(source, pos)
                if not source[pos + 1:end].strip():
                    raise SyntaxError("Attribute expression must not be empty")
                props.append(f"{key}: {self.expression_compile(source, pos + 1, end)}")
                pos = end + 1
            else:
                raise SyntaxError(f"Unexpected attribute value at position {pos}")

        if not props:
            return "null", pos, self_closing
        return "{" + ", ".join(props) + "}", pos, self_closing

    def children_compile(self, source: str, pos: int, name: str) -> Tuple[List[str], int]:
        """
        Compile children up to and including the closing tag of name

        Returns:
            (child expressions, position after the closing tag)
        """
        children: List[str] = []
        text_start = pos

        while pos < len(source):
            ch = source[pos]

            if ch in '<{':
                text = text_clean(source[text_start:pos])
                if text:
                    children.append(json.dumps(html.unescape(text), ensure_ascii=False))

            if source.startswith('</', pos):
                close = CLOSE_TAG_RE.match(source, pos)
                if not close:
                    raise SyntaxError(f"Malformed closing tag at position {pos}")
                if close.group(1) != name:
                    raise SyntaxError(
                        f"Expected </{name}> but found </{close.group(1)}> at position {pos}"
                    )
                return children, close.end()

            if ch == '<':
                child, pos = self.element_compile(source, pos)
                children.append(child)
                text_start = pos
                continue

            if ch == '{':
                end = brace_findMatching(source, pos)
                raw = source[pos + 1:end].strip()
                if raw and not COMMENT_ONLY_RE.match(raw):
                    children.append(self.expression_compile(source, pos + 1, end))
                pos = end + 1
                text_start = pos
                continue

            if ch in '>}':
                raise SyntaxError(f"Unexpected {ch!r} in text at position {pos}")

            pos += 1

        raise SyntaxError(f"Missing closing tag </{name}>")


Transform = Callable[[str], Optional[str]]

# Shared by the scanners when no transform is given explicitly
default_transform: Transform = JSXTransformer().transform
