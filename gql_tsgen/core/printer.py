"""Renders TypedPrograms and index manifests as TypeScript source.

Files are laid out by Jinja2 templates; type expressions are printed by
the filters registered here.

Supports custom templates via the template_dir parameter:
    printer = ProgramPrinter(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import json
import re
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .program import (
    IndexManifest,
    TSImportDeclaration,
    TSIndexedAccess,
    TSKeyword,
    TSLiteralType,
    TSPropertySignature,
    TSType,
    TSTypeAlias,
    TSTypeLiteral,
    TSTypeReference,
    TSUnionType,
    TypedProgram,
)

INDENT = "    "

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def property_key(key: str) -> str:
    """Quote an object key unless it is a valid identifier."""
    if _IDENTIFIER.match(key):
        return key
    return json.dumps(key)


def render_type(node: TSType, depth: int = 0) -> str:
    """Print a type expression. depth is the nesting level of the enclosing object."""
    if isinstance(node, TSKeyword):
        return node.name
    if isinstance(node, TSTypeReference):
        if not node.type_args:
            return node.name
        args = ", ".join(render_type(arg, depth) for arg in node.type_args)
        return f"{node.name}<{args}>"
    if isinstance(node, TSIndexedAccess):
        return f"{node.object_name}[{json.dumps(node.index)}]"
    if isinstance(node, TSLiteralType):
        if isinstance(node.value, bool):
            return "true" if node.value else "false"
        if isinstance(node.value, str):
            return json.dumps(node.value)
        return str(node.value)
    if isinstance(node, TSUnionType):
        return " | ".join(render_type(member, depth) for member in node.types)
    if isinstance(node, TSTypeLiteral):
        if not node.members:
            return "{}"
        lines = ["{"]
        lines.extend(render_member(member, depth + 1) for member in node.members)
        lines.append(INDENT * depth + "}")
        return "\n".join(lines)
    raise TypeError(f"Cannot print type node {node!r}")


def render_member(member: TSPropertySignature, depth: int) -> str:
    readonly = "readonly " if member.readonly else ""
    optional = "?" if member.optional else ""
    return (
        f"{INDENT * depth}{readonly}{property_key(member.key)}{optional}: "
        f"{render_type(member.type, depth)};"
    )


def render_import(declaration: TSImportDeclaration) -> str:
    keyword = "import type" if declaration.type_only else "import"
    names = ", ".join(declaration.names)
    return f"{keyword} {{ {names} }} from {json.dumps(declaration.source)};"


def render_alias(declaration: TSTypeAlias) -> str:
    export = "export " if declaration.exported else ""
    params = f"<{', '.join(declaration.type_params)}>" if declaration.type_params else ""
    return f"{export}type {declaration.name}{params} = {render_type(declaration.type)};"


class ProgramPrinter:
    """Serializes generated programs to text.

    Available templates to override:
        - program.ts.j2: one type-definition file
        - index.ts.j2: the index manifest
    """

    def __init__(self, template_dir: str | Path | None = None):
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_tsgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
        )
        self.env.filters["ts_type"] = render_type
        self.env.filters["ts_import"] = render_import
        self.env.filters["ts_alias"] = render_alias
        self.env.filters["ts_key"] = property_key
        self.env.filters["ts_string"] = json.dumps

    def print_program(self, program: TypedProgram) -> str:
        """Render a type-definition file."""
        template = self.env.get_template("program.ts.j2")
        return template.render(program=program)

    def print_index(self, manifest: IndexManifest) -> str:
        """Render the index manifest."""
        template = self.env.get_template("index.ts.j2")
        return template.render(manifest=manifest)
