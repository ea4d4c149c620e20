"""
Inline rule for embedded JSX

Recognizes JSX elements and {expressions} inside an inline run.

- Self-closing elements and brace expressions become one jsx_inline token.
- Paired elements become an opening jsx_inline token, the tokens of the
  body (parsed as ordinary inline Markdown, so emphasis, links and nested
  JSX keep working), and a closing jsx_inline token.

Finding the closing tag walks the body with md.inline.skipToken, so nested
constructs (code spans, links, nested JSX of the same name) are skipped
wholesale and their closing tags are never mistaken for ours.

A rejected attempt leaves state.pos and state.posMax exactly as they were,
so the next inline rule can try the same position.
"""

from typing import Optional, Tuple

from markdown_it.rules_inline import StateInline

from .grammar import INLINE_GRAMMAR
from .log import LOG
from .transformer import Transform, code_strip, default_transform


def jsxContent_find(state: StateInline, start: int, name: str) -> Optional[Tuple[int, int]]:
    """
    Find the closing tag of a paired element

    Args:
        state: markdown-it inline state (pos is restored before returning)
        start: Position just after the opening tag
        name: Tag name the closing tag has to match

    Returns:
        (contentEnd, closeEnd) positions, or None if the run ends first
    """
    maximum = state.posMax
    oldPos = state.pos
    state.pos = start

    try:
        while state.pos < maximum:
            closed = INLINE_GRAMMAR.tagClose_parse(state.src[state.pos:maximum])

            prevPos = state.pos
            state.md.inline.skipToken(state)

            # skipToken only moves one character when no other construct
            # starts here, so the closing tag is not part of something else
            if closed.status and closed.name == name and prevPos == state.pos - 1:
                return prevPos, prevPos + closed.end
    finally:
        state.pos = oldPos

    return None


def letter_is(ch: str) -> bool:
    """ASCII letters only"""
    return ch.isascii() and ch.isalpha()


def jsxInline_scan(state: StateInline, silent: bool, transform: Transform) -> bool:
    """
    Recognize an embedded JSX construct at state.pos

    May leave state.pos anywhere when it returns False; jsx_inline() takes
    care of restoring it.
    """
    pos = state.pos
    maximum = state.posMax

    first = state.src[pos:pos + 1]
    if first not in ('<', '{') or maximum - pos < 2:
        return False

    # Quick fail on second char if < was first char
    if first == '<':
        second = state.src[pos + 1]
        if not letter_is(second) and second not in '!?/':
            return False

    text = state.src[pos:maximum]

    opened = INLINE_GRAMMAR.tagOpen_parse(text)
    if not opened.status:
        return False

    selfClosing = INLINE_GRAMMAR.tagSelfClose_parse(text)

    if selfClosing.status:
        code = transform(text[:selfClosing.end])
        if not code:
            return False

        if not silent:
            token = state.push('jsx_inline', '', 0)
            token.content = code_strip(code)

        state.pos += selfClosing.end
        return True

    contentStart = pos + opened.end
    found = jsxContent_find(state, contentStart, opened.name)
    if found is None:
        LOG(f"No closing </{opened.name}> for inline element at {pos}", level=3)
        return False
    contentEnd, closeEnd = found

    # Compile the opening tag alone, as if it closed itself
    tag = state.src[pos:contentStart]
    code = transform(tag[:-1] + '/>')
    if not code:
        return False
    code = code_strip(code)

    if not silent:
        if not state.src[contentStart:contentEnd].strip():
            token = state.push('jsx_inline', '', 0)
            token.content = code
        else:
            state.pos = contentStart
            state.posMax = contentEnd

            token = state.push('jsx_inline', '', 1)
            token.content = code[:-1]

            state.md.inline.tokenize(state)

            token = state.push('jsx_inline', '', -1)
            token.content = ')'

    state.pos = closeEnd
    state.posMax = maximum
    return True


def jsx_inline(
    state: StateInline,
    silent: bool,
    transform: Transform = default_transform,
) -> bool:
    """
    Inline rule: try to read embedded JSX at the current position

    Args:
        state: markdown-it inline state
        silent: Validation mode, push no tokens
        transform: Converts JSX source to expression text, None on failure

    Returns:
        True if a construct was consumed; on False, state.pos and
        state.posMax are unchanged
    """
    checkpoint = (state.pos, state.posMax)

    if jsxInline_scan(state, silent, transform):
        return True

    state.pos, state.posMax = checkpoint
    return False
