"""
State models and pipeline helper

Defines RenderState (the per-render context threaded through every render
rule), CompileState (the state bus for the compile pipeline), and the
pipeline() helper for composing transformation stages.
"""

from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Dict, List, Optional, Set, TypeVar


@dataclass
class RenderState:
    """
    Per-render context for JSXRenderer

    Exactly one instance exists per full-document render. It is created at
    the start of render(), passed to every rule, and handed back to the
    caller afterwards.

    Attributes:
        tags: Camelized element names used by the rendered body; the caller
              emits a binding for each one
        indent_level: Current indentation in spaces (never negative)
    """
    tags: Set[str] = field(default_factory=set)
    indent_level: int = 0

    def indent_push(self) -> None:
        """Open one nesting level"""
        self.indent_level += 2

    def indent_pop(self) -> None:
        """Close one nesting level"""
        self.indent_level = max(0, self.indent_level - 2)


CS = TypeVar("CS", bound="CompileState")


@dataclass
class CompileState:
    """
    Central state container for the compile pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: source, verbosity, scope, parser (optional)
        - source_parse: parser, tokens, env
        - body_render: body, tags
        - module_assemble: module

    Attributes:
        source: Markdown source text with embedded JSX
        verbosity: Logging verbosity level (0-3)
        scope: Component names taken from props.components in the module
        parser: MarkdownIt instance used for parsing and rendering
        tokens: Block token stream produced by markdown-it
        env: markdown-it environment shared by parse and render
        body: Rendered call-expression body
        tags: Element names recorded while rendering the body
        module: Final component module source
    """

    source: str = field(default="")
    verbosity: int = field(default=1)
    scope: List[str] = field(default_factory=list)

    # Pipeline state
    parser: Optional[Any] = field(default=None)  # MarkdownIt at runtime
    tokens: Optional[List[Any]] = field(default=None)  # List[Token] at runtime
    env: Dict[str, Any] = field(default_factory=dict)
    body: str = field(default="")
    tags: Set[str] = field(default_factory=set)
    module: str = field(default="")

    def copy(self: CS) -> CS:
        """
        Creates a shallow copy of the CompileState instance.

        Returns:
            A new CompileState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: CompileState, *stages: Callable[[CompileState], CompileState]
) -> CompileState:
    """
    Thread a CompileState through stages, left to right

    Each stage takes the previous stage's state and returns a new one;
    pipeline(state, source_parse, body_render) is
    body_render(source_parse(state)).
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
