"""
mdjsx - Markdown with embedded JSX, compiled to call expressions

Extends markdown-it so that JSX inside a Markdown document is recognized and
converted, and renders the whole document as the body of a component.
"""

__version__ = "1.0.0"

from .lib import (
    JSXRenderer,
    JSXTransformer,
    Highlighter,
    Compiler,
    jsx_plugin,
    markdown_make,
    compile_markdown,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "JSXRenderer",
    "JSXTransformer",
    "Highlighter",
    "Compiler",
    "jsx_plugin",
    "markdown_make",
    "compile_markdown",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
