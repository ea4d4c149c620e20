"""
End-to-end compilation tests

Tests the full pipeline: Markdown source → tokens → call-expression body →
component module.
"""

import pytest

from mdjsx.lib.compiler import (
    Compiler,
    body_render,
    compile_markdown,
    module_assemble,
    source_parse,
)
from mdjsx.lib.plugin import markdown_make
from mdjsx.models.state import CompileState, pipeline


class TestModuleCompilation:
    """Test complete documents compiled to modules"""

    def test_heading_and_component(self):
        """Heading plus a block component"""
        source = '# Hello\n\n<Card title="x"/>\n'
        state = compile_markdown(source, verbosity=0, scope=["Card"])
        module = state.module

        assert module.startswith('import { createElement, createFactory } from "react"\n')
        assert "export default function MarkdownDocument(props = {}) {" in module
        assert "  const components = props.components || {}" in module
        assert "  const { Card } = components" in module
        assert '  const h1 = components.h1 || createFactory("h1")' in module
        assert '  return createElement("div", props.wrapperProps || null,' in module
        assert "    h1({},\n" in module
        assert '      "Hello",\n' in module
        assert '    createElement(Card, {title: "x"}),\n' in module
        assert module.endswith("  )\n}\n")

    def test_empty_document(self):
        """No body means a childless wrapper"""
        module = compile_markdown("", verbosity=0).module
        assert '  return createElement("div", props.wrapperProps || null)\n}' in module

    def test_block_with_mapped_elements(self):
        """A block whose expression child renders elements"""
        source = "<ul>\n{items.map(i => <li>{i}</li>)}\n</ul>\n"
        state = compile_markdown(source, verbosity=0)

        assert state.body == '    createElement("ul", null, items.map(i => createElement("li", null, i)))'
        assert "<li>" not in state.module

    def test_tags_collected(self):
        """Every element name gets exactly one binding"""
        state = compile_markdown("a\n\nb *c*\n", verbosity=0)

        assert state.tags == {"p", "em"}
        assert state.module.count("const p = ") == 1
        assert state.module.count("const em = ") == 1

    def test_inline_markdown_inside_component(self):
        """Markdown inside a paired inline element still compiles"""
        state = compile_markdown("Say <Box>**hi**</Box>\n", verbosity=0)

        assert "createElement(Box, null,\n" in state.body
        assert "strong({}," in state.body
        assert "strong" in state.tags

    def test_custom_parser(self):
        """A supplied parser is used as-is"""
        parser = markdown_make(breaks=True)
        state = compile_markdown("a\nb\n", verbosity=0, parser=parser)

        assert state.parser is parser
        assert "br({})" in state.body

    def test_verbose_compile(self):
        """Logging at full verbosity does not change the output"""
        quiet = compile_markdown("# T\n", verbosity=0).module
        loud = compile_markdown("# T\n", verbosity=3).module
        assert quiet == loud


class TestPipelineStages:
    """Test the individual pipeline stages"""

    def test_source_parse(self):
        """Parsing fills parser, env and tokens"""
        state = source_parse(CompileState(source="# T\n", verbosity=0))

        assert state.parser is not None
        assert [token.type for token in state.tokens] == [
            "heading_open",
            "inline",
            "heading_close",
        ]

    def test_stages_do_not_mutate_input(self):
        """Each stage returns a new state"""
        initial = CompileState(source="x\n", verbosity=0)
        parsed = source_parse(initial)

        assert initial.tokens is None
        assert parsed is not initial

    def test_body_indented(self):
        """Body is rendered at the module's body indent"""
        state = pipeline(CompileState(source="x\n", verbosity=0), source_parse, body_render)
        assert state.body == '    p({},\n      "x",\n    )'

    def test_module_assemble(self):
        """Assembly uses the rendered body and tags"""
        state = CompileState(body="    foo", tags={"p"}, verbosity=0)
        module = module_assemble(state).module

        assert "    foo,\n" in module
        assert 'const p = components.p || createFactory("p")' in module


class TestCompiler:
    """Test module generation options"""

    def test_namespace_pragma(self):
        """A dotted pragma imports the namespace"""
        compiler = Compiler(pragma="React.createElement")

        assert compiler.imports_generate() == 'import * as React from "react"'
        assert compiler.bindings_generate({"p"})[-1] == (
            'const p = components.p || React.createFactory("p")'
        )

    def test_names_and_sources(self):
        """Component name, import source and wrapper are configurable"""
        compiler = Compiler(
            component_name="Doc",
            import_source="preact",
            pragma="h",
            wrapper_element="section",
        )
        module = compiler.module_build("    x", {"p"})

        assert module.startswith('import { h, createFactory } from "preact"\n')
        assert "export default function Doc(props = {}) {" in module
        assert '  return h("section", props.wrapperProps || null,' in module

    def test_scope_names_not_rebound(self):
        """Scoped components are destructured, never given a factory"""
        lines = Compiler(scope=["Chart"]).bindings_generate({"Chart", "p"})

        assert "const { Chart } = components" in lines
        assert not any(line.startswith("const Chart =") for line in lines)

    @pytest.mark.parametrize("tags", [set(), {"b", "a"}])
    def test_bindings_sorted(self, tags):
        """Bindings follow the sorted element names"""
        lines = Compiler().bindings_generate(tags)
        names = [line.split()[1] for line in lines[1:]]
        assert names == sorted(tags)
