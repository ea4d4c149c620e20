"""
markdown-it plugin wiring

Registers the JSX block and inline rules on a MarkdownIt instance, and
builds ready-to-use instances rendering with JSXRenderer.

Example:
    >>> md = markdown_make()
    >>> print(md.render('Hello <Name first="Ada"/>'))
    p({},
      "Hello ",
      createElement(Name, {first: "Ada"}),
    )
"""

from functools import partial
from typing import Any, Callable, Optional

from markdown_it import MarkdownIt

from ..config import AppSettings, appsettings
from .block import jsx_block
from .inline import jsx_inline
from .renderer import JSXRenderer
from .transformer import JSXTransformer, Transform


def jsx_plugin(md: MarkdownIt, transform: Optional[Transform] = None) -> None:
    """
    Register the embedded JSX rules

    The block rule runs before html_block and may terminate paragraphs,
    references and blockquotes; the inline rule runs before html_inline.

    Args:
        md: Parser to extend
        transform: JSX-to-expression callable shared by both rules
                   (defaults to a JSXTransformer with the configured pragma)
    """
    if transform is None:
        transform = JSXTransformer().transform

    md.block.ruler.before(
        "html_block",
        "jsx_block",
        partial(jsx_block, transform=transform),
        {"alt": ["paragraph", "reference", "blockquote"]},
    )
    md.inline.ruler.before(
        "html_inline",
        "jsx_inline",
        partial(jsx_inline, transform=transform),
    )


def markdown_make(
    settings: Optional[AppSettings] = None,
    transform: Optional[Transform] = None,
    highlight: Optional[Callable[[str, str], Any]] = None,
    **options: Any,
) -> MarkdownIt:
    """
    Build a CommonMark parser that renders to call expressions

    Raw HTML is disabled: tag-like text is either embedded JSX or plain
    text, and html_inline would otherwise swallow closing tags the inline
    rule needs to see.

    Args:
        settings: Settings to take breaks/langPrefix/initialIndent from
        transform: JSX-to-expression callable
        highlight: Optional ``(code, lang) -> str`` for fenced code
        **options: Extra markdown-it options, applied last

    Returns:
        Configured MarkdownIt instance
    """
    settings = settings or appsettings
    if transform is None:
        transform = JSXTransformer(settings.pragma).transform

    config = settings.options_make()
    config.update({"html": False, "highlight": highlight})
    config.update(options)

    md = MarkdownIt("commonmark", config, renderer_cls=JSXRenderer)
    md.use(jsx_plugin, transform=transform)
    return md
