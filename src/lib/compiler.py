"""
Compiler from Markdown with embedded JSX to a component module

Wraps the rendered call-expression body into a module that exports one
functional component:

    import { createElement, createFactory } from "react"

    export default function MarkdownDocument(props = {}) {
      const components = props.components || {}
      const h1 = components.h1 || createFactory("h1")
      return createElement("div", props.wrapperProps || null,
        h1({},
          "Hello",
        ),
      )
    }

Every element name the renderer recorded gets a binding, overridable via
props.components. Component identifiers used inside embedded JSX are not
known to the renderer; list them in ``scope`` to destructure them from
props.components.

The pipeline functions (source_parse, body_render, module_assemble) follow
the state-bus pattern: each takes a CompileState and returns a new one.
"""

import json
from typing import Iterable, List, Optional, Sequence

from ..config import appsettings
from ..models.state import CompileState, pipeline
from .log import LOG, state_connectToLogger
from .plugin import markdown_make


BODY_INDENT = 4


class Compiler:
    """
    Builds the component module around a rendered body

    Args:
        component_name: Exported function name
        import_source: Module the pragma and createFactory come from
        pragma: Element call used by embedded JSX
        wrapper_element: Root element of the component
        scope: Component identifiers taken from props.components
    """

    def __init__(
        self,
        component_name: Optional[str] = None,
        import_source: Optional[str] = None,
        pragma: Optional[str] = None,
        wrapper_element: Optional[str] = None,
        scope: Sequence[str] = (),
    ) -> None:
        self.component_name = component_name or appsettings.component_name
        self.import_source = import_source or appsettings.import_source
        self.pragma = pragma or appsettings.pragma
        self.wrapper_element = wrapper_element or appsettings.wrapper_element
        self.scope = list(scope)

    def factory_name(self) -> str:
        """Expression that creates a factory for an element name"""
        if '.' in self.pragma:
            return self.pragma.split('.')[0] + '.createFactory'
        return 'createFactory'

    def imports_generate(self) -> str:
        """
        Import statement for the pragma and createFactory

        A dotted pragma (React.createElement) imports the namespace instead.
        """
        source = json.dumps(self.import_source)
        if '.' in self.pragma:
            namespace = self.pragma.split('.')[0]
            return f"import * as {namespace} from {source}"
        return f"import {{ {self.pragma}, createFactory }} from {source}"

    def bindings_generate(self, tags: Iterable[str]) -> List[str]:
        """
        One const per element name, falling back to a DOM factory

        Example:
            const p = components.p || createFactory("p")
        """
        lines = ["const components = props.components || {}"]
        if self.scope:
            lines.append(f"const {{ {', '.join(self.scope)} }} = components")
        for tag in sorted(tags):
            if tag in self.scope:
                continue
            lines.append(f"const {tag} = components.{tag} || {self.factory_name()}({json.dumps(tag)})")
        return lines

    def module_build(self, body: str, tags: Iterable[str]) -> str:
        """
        Assemble the full module source

        Args:
            body: Renderer output, indented by BODY_INDENT
            tags: Element names recorded while rendering

        Returns:
            Module source text ending in a newline
        """
        wrapper = json.dumps(self.wrapper_element)
        lines = [self.imports_generate(), ""]
        lines.append(f"export default function {self.component_name}(props = {{}}) {{")
        lines.extend("  " + line for line in self.bindings_generate(tags))

        if body.strip():
            lines.append(f"  return {self.pragma}({wrapper}, props.wrapperProps || null,")
            lines.append(body + ",")
            lines.append("  )")
        else:
            lines.append(f"  return {self.pragma}({wrapper}, props.wrapperProps || null)")

        lines.append("}")
        return "\n".join(lines) + "\n"


def source_parse(inputstate: CompileState) -> CompileState:
    """
    Parse Markdown source into a block token stream

    Args:
        inputstate: State with source (and optionally parser) set

    Returns:
        CompileState with added fields:
            - parser: MarkdownIt instance used
            - tokens: List[Token] from the parser
            - env: Parse environment
    """
    state = inputstate.copy()

    if state.parser is None:
        state.parser = markdown_make()

    LOG("Parsing Markdown source...", level=1)
    state.env = {}
    state.tokens = state.parser.parse(state.source, state.env)
    LOG(f"Parsed {len(state.tokens)} block tokens", level=2)

    return state


def body_render(inputstate: CompileState) -> CompileState:
    """
    Render the token stream to the component body

    Returns:
        CompileState with added fields:
            - body: Call-expression text indented for the module
            - tags: Element names used by the body
    """
    state = inputstate.copy()

    LOG("Rendering tokens to call expressions...", level=1)
    options = dict(state.parser.options)
    options["initialIndent"] = BODY_INDENT
    state.body, render_state = state.parser.renderer.document_render(
        state.tokens, options, state.env
    )
    state.tags = set(render_state.tags)
    LOG(f"Body uses {len(state.tags)} element names: {', '.join(sorted(state.tags))}", level=2)

    return state


def module_assemble(inputstate: CompileState) -> CompileState:
    """
    Wrap the body into the exported component module

    Returns:
        CompileState with added field:
            - module: Complete module source
    """
    state = inputstate.copy()

    LOG("Assembling component module...", level=1)
    compiler = Compiler(scope=state.scope)
    state.module = compiler.module_build(state.body, state.tags)
    LOG(f"Module is {len(state.module.splitlines())} lines", level=2)

    return state


def compile_markdown(
    source: str,
    verbosity: int = 1,
    scope: Sequence[str] = (),
    parser=None,
) -> CompileState:
    """
    Compile Markdown with embedded JSX to a component module

    Orchestrates the pipeline:
        1. source_parse: Markdown source → tokens
        2. body_render: tokens → call-expression body
        3. module_assemble: body → module source

    Args:
        source: Markdown text
        verbosity: Logging verbosity (0 silences the pipeline)
        scope: Component identifiers to take from props.components
        parser: Optional MarkdownIt instance (defaults to markdown_make())

    Returns:
        Final CompileState; the module text is in ``.module``
    """
    state = CompileState(source=source, verbosity=verbosity, scope=list(scope), parser=parser)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    return pipeline(state, source_parse, body_render, module_assemble)
