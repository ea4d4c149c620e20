"""
Renderer-specific data models
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class JSXExpression:
    """
    Pre-rendered expression marker for token attribute values

    Attribute values are normally literal strings and get JSON-quoted by the
    renderer. Wrapping a value in JSXExpression makes the renderer inline
    ``code`` as-is instead.

    Example:
        token.attrSet("onClick", JSXExpression("handleClick"))
        renders as {"onClick": handleClick}
    """
    code: str
