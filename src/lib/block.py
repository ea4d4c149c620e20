"""
Block rule for embedded JSX

Recognizes JSX elements that start at the beginning of a block-level line
and consumes every line up to the matching closing tag.

Finding the end of the block:

- If the opening line is a self-closing tag, the block is that one line.
- Otherwise scan forward for lines that start with a closing tag of the
  same name. The first candidate whose collected lines transform
  successfully ends the block. A candidate that does not transform is
  assumed to close a nested element of the same name, so scanning goes on.
- If no candidate works, the maximal slice is tried as a last resort.
- If that fails too this is not a JSX block, and other block rules
  (paragraph, fence, ...) get a chance at the same lines.

Nested same-name elements are told apart only by "does the span
transform", not by counting open/close pairs.
"""

from markdown_it.rules_block import StateBlock

from .grammar import BLOCK_GRAMMAR
from .log import LOG
from .transformer import Transform, code_strip, default_transform


def jsx_block(
    state: StateBlock,
    startLine: int,
    endLine: int,
    silent: bool,
    transform: Transform = default_transform,
) -> bool:
    """
    Try to read an embedded JSX block starting at startLine

    Args:
        state: markdown-it block state
        startLine: Line the block would start on
        endLine: First line the block may not reach
        silent: Only report whether a block could start here
        transform: Converts JSX source to expression text, None on failure

    Returns:
        True if a block was recognized (and, unless silent, pushed as a
        jsx_block token with state.line moved past it)
    """
    pos = state.bMarks[startLine] + state.tShift[startLine]
    maximum = state.eMarks[startLine]

    # if it's indented more than 3 spaces, it should be a code block
    if state.sCount[startLine] - state.blkIndent >= 4:
        return False

    if state.src[pos:pos + 1] != '<':
        return False

    lineText = state.src[pos:maximum].strip()

    opened = BLOCK_GRAMMAR.tagOpen_parse(lineText)
    if not opened.status:
        return False

    if silent:
        # true if this sequence can be a terminator, false otherwise
        return True

    nextLine = startLine + 1
    code = None

    if not BLOCK_GRAMMAR.tagSelfClose_parse(lineText).status:
        while nextLine < endLine:
            if state.sCount[nextLine] < state.blkIndent:
                break

            pos = state.bMarks[nextLine] + state.tShift[nextLine]
            maximum = state.eMarks[nextLine]
            closed = BLOCK_GRAMMAR.tagClose_parse(state.src[pos:maximum])

            if closed.status and closed.name == opened.name:
                content = state.getLines(startLine, nextLine + 1, state.blkIndent, True)
                code = transform(content)
                if code:
                    nextLine += 1
                    break
                LOG(f"Closing </{closed.name}> on line {nextLine} did not compile, scanning on", level=3)

            nextLine += 1

    if not code:
        content = state.getLines(startLine, nextLine, state.blkIndent, True)
        code = transform(content)

    if not code:
        LOG(f"No JSX block for <{opened.name}> on line {startLine}", level=3)
        return False

    state.line = nextLine

    token = state.push('jsx_block', '', 0)
    token.map = [startLine, nextLine]
    token.content = code_strip(code)

    return True
