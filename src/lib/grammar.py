"""
Tag grammar for embedded JSX

Stateless recognizers that test whether a text slice begins with an open,
close or self-closing tag (or, inline only, a brace expression) and report
the tag name and the number of characters consumed.

Two flavors are provided:

- BLOCK: applied to a whole line (already stripped by the block scanner).
  An open tag only has to start the line; a self-closing tag has to be the
  entire line.
- INLINE: applied to the text at the inline cursor. Anything may follow the
  matched construct, and `{expression}` counts as a self-closing construct.

The low-level scanners (brace_findMatching, string_skip, tag_scan) are shared
with the transformer so both agree on where a tag ends.

Example:
    >>> INLINE_GRAMMAR.tagOpen_parse('<Foo a="1">hi</Foo>')
    TagMatch(status=True, name='Foo', end=11)
    >>> BLOCK_GRAMMAR.tagSelfClose_parse('<Foo a="1">')
    TagMatch(status=False, name=None, end=0)
"""

import re
from typing import Optional, Tuple

from ..models.grammar import TagFlavor, TagMatch, NO_MATCH


TAG_NAME = r'[A-Za-z_$][\w$-]*(?:[.:][A-Za-z_$][\w$-]*)*'

TAG_NAME_RE = re.compile(TAG_NAME)
ATTR_NAME_RE = re.compile(r'[A-Za-z_$][\w$-]*(?::[A-Za-z_$][\w$-]*)?')
CLOSE_TAG_RE = re.compile(r'</(' + TAG_NAME + r')\s*>')

QUOTES = ('"', "'", '`')


def string_skip(text: str, start_pos: int) -> int:
    """
    Skip a JavaScript string literal

    Args:
        text: Source text
        start_pos: Position of the opening quote

    Returns:
        Position just after the closing quote

    Raises:
        SyntaxError: If the string is not terminated (plain quotes may not
                     span lines, template literals may)
    """
    quote = text[start_pos]
    pos = start_pos + 1

    while pos < len(text):
        ch = text[pos]
        if ch == '\\':
            pos += 2
            continue
        if ch == quote:
            return pos + 1
        if ch == '\n' and quote != '`':
            break
        pos += 1

    raise SyntaxError(f"Unterminated string at position {start_pos}")


def brace_findMatching(text: str, start_pos: int) -> int:
    """
    Find matching closing brace using depth tracking

    Scans forward from an opening brace, tracking nesting depth. String
    literals and block comments are skipped wholesale so braces inside them
    do not count.

    Args:
        text: Source text
        start_pos: Character position of opening '{'

    Returns:
        Character position of matching closing '}'

    Raises:
        SyntaxError: If the end of text is reached before depth returns to 0

    Example:
        For text '{a ? "}" : {b: 1}}' at position 0:
        Returns 17 (position of final closing brace)
    """
    depth = 1
    pos = start_pos + 1

    while pos < len(text):
        ch = text[pos]
        if ch in QUOTES:
            pos = string_skip(text, pos)
            continue
        if text.startswith('/*', pos):
            comment_end = text.find('*/', pos + 2)
            if comment_end == -1:
                break
            pos = comment_end + 2
            continue
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                return pos
        pos += 1

    raise SyntaxError(f"Unmatched brace at position {start_pos}")


def whitespace_skip(text: str, pos: int) -> int:
    """Advance past whitespace"""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def tag_scan(text: str, pos: int = 0) -> Optional[Tuple[str, int, bool]]:
    """
    Scan an opening or self-closing tag starting at pos

    Attribute values may be quoted strings or brace expressions, and spread
    attributes ({...props}) are allowed, so a '>' inside either never ends
    the tag early.

    Args:
        text: Source text
        pos: Position of the '<'

    Returns:
        (name, end, self_closing) where end is the position just after the
        tag, or None if no well-formed tag starts at pos
    """
    if not text.startswith('<', pos):
        return None

    match = TAG_NAME_RE.match(text, pos + 1)
    if not match:
        return None

    name = match.group(0)
    i = match.end()

    try:
        while i < len(text):
            ch = text[i]
            if ch.isspace():
                i += 1
                continue
            if text.startswith('/>', i):
                return name, i + 2, True
            if ch == '>':
                return name, i + 1, False
            if ch == '{':
                i = brace_findMatching(text, i) + 1
                continue

            attr = ATTR_NAME_RE.match(text, i)
            if not attr:
                return None
            i = whitespace_skip(text, attr.end())

            if i < len(text) and text[i] == '=':
                i = whitespace_skip(text, i + 1)
                if i >= len(text):
                    return None
                if text[i] in ('"', "'"):
                    value_end = text.find(text[i], i + 1)
                    if value_end == -1:
                        return None
                    i = value_end + 1
                elif text[i] == '{':
                    i = brace_findMatching(text, i) + 1
                else:
                    return None
    except SyntaxError:
        return None

    return None


class TagGrammar:
    """
    Open / close / self-close recognizers for one flavor

    All methods are pure: they never raise and never look past the text
    they are given.
    """

    def __init__(self, flavor: TagFlavor) -> None:
        self.flavor = flavor

    def braceExpression_parse(self, text: str) -> TagMatch:
        """Match a {expression} at the start of text (inline flavor only)"""
        if self.flavor is not TagFlavor.INLINE or not text.startswith('{'):
            return NO_MATCH
        try:
            end = brace_findMatching(text, 0)
        except SyntaxError:
            return NO_MATCH
        return TagMatch(status=True, name=None, end=end + 1)

    def tagOpen_parse(self, text: str) -> TagMatch:
        """
        Match an opening tag at the start of text

        Self-closing tags also count as opening tags, as do brace
        expressions in the inline flavor.

        Args:
            text: Slice to test

        Returns:
            TagMatch with the tag name and the length of the tag
        """
        if text.startswith('{'):
            return self.braceExpression_parse(text)

        scanned = tag_scan(text)
        if scanned is None:
            return NO_MATCH

        name, end, _ = scanned
        return TagMatch(status=True, name=name, end=end)

    def tagSelfClose_parse(self, text: str) -> TagMatch:
        """
        Match a self-closing construct at the start of text

        For the block flavor the construct has to span the whole text
        (trailing whitespace aside).
        """
        if text.startswith('{'):
            return self.braceExpression_parse(text)

        scanned = tag_scan(text)
        if scanned is None:
            return NO_MATCH

        name, end, self_closing = scanned
        if not self_closing:
            return NO_MATCH
        if self.flavor is TagFlavor.BLOCK and text[end:].strip():
            return NO_MATCH
        return TagMatch(status=True, name=name, end=end)

    def tagClose_parse(self, text: str) -> TagMatch:
        """Match a closing tag (</Name>) at the start of text"""
        match = CLOSE_TAG_RE.match(text)
        if not match:
            return NO_MATCH
        return TagMatch(status=True, name=match.group(1), end=match.end())


BLOCK_GRAMMAR = TagGrammar(TagFlavor.BLOCK)
INLINE_GRAMMAR = TagGrammar(TagFlavor.INLINE)
