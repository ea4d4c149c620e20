"""
mdjsx - Markdown with embedded JSX, compiled to call expressions
"""

__version__ = "1.0.0"

from .grammar import TagGrammar, BLOCK_GRAMMAR, INLINE_GRAMMAR
from .transformer import JSXTransformer
from .block import jsx_block
from .inline import jsx_inline
from .renderer import JSXRenderer
from .highlight import Highlighter
from .plugin import jsx_plugin, markdown_make
from .compiler import Compiler, compile_markdown
from .log import LOG, state_connectToLogger, state_disconnectFromLogger

__all__ = [
    "TagGrammar",
    "BLOCK_GRAMMAR",
    "INLINE_GRAMMAR",
    "JSXTransformer",
    "jsx_block",
    "jsx_inline",
    "JSXRenderer",
    "Highlighter",
    "jsx_plugin",
    "markdown_make",
    "Compiler",
    "compile_markdown",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "__version__",
]
