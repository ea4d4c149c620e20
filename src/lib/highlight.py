"""
Pygments-backed highlight callback for fenced code

The renderer only knows the ``highlight(code, lang)`` option; this module
provides a ready-made implementation of it.

    md = markdown_make(highlight=Highlighter(style="monokai"))

Unknown or missing languages return "" so the renderer falls back to the
raw code. With wrap=True the result is a complete <pre> block; the renderer
then adds no language class.

Limitation: whatever this returns is HTML *text*. The renderer emits it as a
JSON-quoted string child of the code element, so a component rendering the
body shows the markup escaped (literal <span style=...>), not styled code.
Using the output as markup needs a dangerouslySetInnerHTML-style prop, which
the renderer does not generate.
"""

from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..config import appsettings
from .log import LOG


class Highlighter:
    """
    Callable highlighter producing inline-styled HTML

    Args:
        style: Pygments style name (defaults to appsettings.highlight_style)
        wrap: Wrap the highlighted code in <pre><code>
    """

    def __init__(self, style: Optional[str] = None, wrap: bool = False) -> None:
        self.style = style or appsettings.highlight_style
        self.wrap = wrap

    def lexer_get(self, lang: str) -> Optional[Lexer]:
        """Look up a lexer by language name, None if unknown"""
        if not lang:
            return None
        try:
            return get_lexer_by_name(lang)
        except ClassNotFound:
            LOG(f"No lexer for language '{lang}'", level=3)
            return None

    def __call__(self, code: str, lang: str) -> str:
        lexer = self.lexer_get(lang)
        if lexer is None:
            return ""

        formatter = HtmlFormatter(style=self.style, noclasses=True, nowrap=True)
        highlighted = highlight(code, lexer, formatter)

        if self.wrap:
            return f'<pre class="highlight"><code>{highlighted}</code></pre>'
        return highlighted
