"""Tests for the TypeScript printer."""

import pytest

from gql_tsgen.core.index import compose_index
from gql_tsgen.core.printer import ProgramPrinter, property_key, render_alias, render_type
from gql_tsgen.core.program import (
    NULL,
    TSImportDeclaration,
    TSIndexedAccess,
    TSKeyword,
    TSLiteralType,
    TSPropertySignature,
    TSTypeAlias,
    TSTypeLiteral,
    TSTypeReference,
    TSUnionType,
    TypedProgram,
)


class TestRenderType:
    """Tests for printing type expressions."""

    def test_keyword(self):
        assert render_type(NULL) == "null"

    def test_reference_with_arguments(self):
        node = TSTypeReference("Maybe", [TSTypeReference("Array", [TSIndexedAccess("Scalars", "ID")])])
        assert render_type(node) == 'Maybe<Array<Scalars["ID"]>>'

    def test_literals(self):
        assert render_type(TSLiteralType(True)) == "true"
        assert render_type(TSLiteralType(False)) == "false"
        assert render_type(TSLiteralType("ADMIN")) == '"ADMIN"'
        assert render_type(TSLiteralType(3)) == "3"

    def test_union(self):
        node = TSUnionType([TSTypeReference("A"), TSKeyword("undefined")])
        assert render_type(node) == "A | undefined"

    def test_empty_object(self):
        assert render_type(TSTypeLiteral()) == "{}"

    def test_nested_object(self):
        node = TSTypeLiteral([
            TSPropertySignature("a", TSTypeLiteral([TSPropertySignature("b", TSKeyword("string"))])),
        ])
        assert render_type(node) == "{\n    a: {\n        b: string;\n    };\n}"

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            render_type("string")


class TestPropertyKey:
    def test_identifier(self):
        assert property_key("input") == "input"

    def test_dollar_identifier(self):
        assert property_key("$fragments") == "$fragments"

    def test_quoted(self):
        assert property_key("not-an-identifier") == '"not-an-identifier"'
        assert property_key("1st") == '"1st"'


class TestRenderAlias:
    def test_type_params(self):
        alias = TSTypeAlias("Maybe", TSUnionType([TSTypeReference("T"), NULL]), type_params=["T"])
        assert render_alias(alias) == "export type Maybe<T> = T | null;"

    def test_not_exported(self):
        alias = TSTypeAlias("Local", TSKeyword("string"), exported=False)
        assert render_alias(alias) == "type Local = string;"


class TestProgramPrinter:
    """Tests for whole-file rendering."""

    def test_program_without_imports(self):
        program = TypedProgram([TSTypeAlias("A", TSKeyword("string")), TSTypeAlias("B", TSKeyword("number"))])
        assert ProgramPrinter().print_program(program) == (
            "export type A = string;\n\nexport type B = number;\n"
        )

    def test_value_import(self):
        program = TypedProgram([TSImportDeclaration(["a", "b"], "./x", type_only=False)])
        assert ProgramPrinter().print_program(program).startswith('import { a, b } from "./x";\n')

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "program.ts.j2").write_text(
            "// custom\n{% for d in program.aliases %}{{ d | ts_alias }}\n{% endfor %}"
        )
        printer = ProgramPrinter(template_dir=tmp_path)
        program = TypedProgram([TSTypeAlias("A", TSKeyword("string"))])
        assert printer.print_program(program) == "// custom\nexport type A = string;\n"

    def test_missing_template_dir_falls_back(self, tmp_path):
        printer = ProgramPrinter(template_dir=tmp_path / "nope")
        program = TypedProgram([TSTypeAlias("A", TSKeyword("string"))])
        assert printer.print_program(program) == "export type A = string;\n"

    def test_partial_override_keeps_builtin_index(self, tmp_path):
        (tmp_path / "program.ts.j2").write_text("x")
        text = ProgramPrinter(template_dir=tmp_path).print_index(compose_index([], "/out/index.d.ts"))
        assert text == 'export * from "./runtime";\nexport * from "./stores";\n'
