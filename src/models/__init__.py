"""
Models package for mdjsx

Contains data structures and type definitions for scanning and rendering.
"""

from .state import RenderState, CompileState, pipeline
from .grammar import TagFlavor, TagMatch, NO_MATCH
from .render import JSXExpression

__all__ = [
    "RenderState",
    "CompileState",
    "pipeline",
    "TagFlavor",
    "TagMatch",
    "NO_MATCH",
    "JSXExpression",
]
