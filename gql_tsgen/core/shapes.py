"""Internal shape generation.

The shape generator turns the scrubbed documents of a run into the per-field
types every artifact imports by name: <Name>Query, <Name>QueryVariables,
<Name>Fragment and so on. The generator is a collaborator; anything that
implements ShapeGenerator can be plugged into the orchestrator.

TypeScriptShapeGenerator is the built-in implementation. It mirrors the
typescript + typescript-operations plugin output closely enough for the
artifacts to type-check, with fragment masking on by default.
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLSchema,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
    is_enum_type,
    is_input_object_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    type_from_ast,
)

from .errors import ShapeGenerationError
from .fragments import FRAGMENT_KEY, fragment_shape_name
from .operations import shape_type_name, variables_type_name
from .printer import ProgramPrinter
from .program import (
    NULL,
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
from .scalars import BUILTIN_SCALARS, ScalarRegistry


@runtime_checkable
class ShapeGenerator(Protocol):
    """Protocol for internal shape generators.

    Example:
        class PrecomputedShapes:
            def __init__(self, text: str):
                self.text = text

            def generate(self, documents, schema) -> str:
                return self.text
    """

    def generate(self, documents: list[DocumentNode], schema: GraphQLSchema) -> str:
        """Produce the internal shape file for a batch of scrubbed documents.

        Raises:
            ShapeGenerationError: If the shapes cannot be generated
        """
        ...


@dataclass
class _ShapeContext:
    """Per-run state: what has been referenced and where we are."""
    schema: GraphQLSchema
    fragments: dict[str, FragmentDefinitionNode]
    enums: set[str] = field(default_factory=set)
    inputs: set[str] = field(default_factory=set)
    document_name: str = ""


def _maybe(type_: TSType) -> TSTypeReference:
    return TSTypeReference("Maybe", [type_])


class TypeScriptShapeGenerator:
    """Built-in shape generator producing TypeScript type aliases."""

    def __init__(
        self,
        scalars: ScalarRegistry | None = None,
        fragment_masking: bool = True,
        printer: ProgramPrinter | None = None,
    ):
        self.scalars = scalars or ScalarRegistry()
        self.fragment_masking = fragment_masking
        self.printer = printer or ProgramPrinter()

    def generate(self, documents: list[DocumentNode], schema: GraphQLSchema) -> str:
        """Generate the internal shape file text."""
        return self.printer.print_program(self.build_program(documents, schema))

    def build_program(self, documents: list[DocumentNode], schema: GraphQLSchema) -> TypedProgram:
        """Build the shape declarations for every definition in documents."""
        ctx = _ShapeContext(schema=schema, fragments=self._collect_fragments(documents))

        shapes: list[TSTypeAlias] = []
        seen: set[str] = set()
        for document in documents:
            for definition in document.definitions:
                if isinstance(definition, OperationDefinitionNode):
                    aliases = self._operation_shapes(ctx, definition)
                elif isinstance(definition, FragmentDefinitionNode):
                    aliases = [self._fragment_shape(ctx, definition)]
                else:
                    continue
                for alias in aliases:
                    if alias.name in seen:
                        raise ShapeGenerationError(f"Duplicate shape name {alias.name!r}")
                    seen.add(alias.name)
                    shapes.append(alias)

        program = TypedProgram()
        program.body.append(
            TSTypeAlias("Maybe", TSUnionType([TSTypeReference("T"), NULL]), type_params=["T"])
        )
        program.body.append(TSTypeAlias("Scalars", self._scalars_type(schema)))
        program.body.extend(self._named_types(ctx))
        program.body.extend(shapes)
        return program

    @staticmethod
    def _collect_fragments(documents: list[DocumentNode]) -> dict[str, FragmentDefinitionNode]:
        fragments = {}
        for document in documents:
            for definition in document.definitions:
                if isinstance(definition, FragmentDefinitionNode):
                    fragments[definition.name.value] = definition
        return fragments

    def _scalars_type(self, schema: GraphQLSchema) -> TSTypeLiteral:
        """The Scalars type: built-ins first, then custom scalars by name."""
        names = list(BUILTIN_SCALARS)
        custom = sorted(
            name
            for name, type_ in schema.type_map.items()
            if is_scalar_type(type_) and name not in BUILTIN_SCALARS and not name.startswith("__")
        )
        return TSTypeLiteral([
            TSPropertySignature(name, TSKeyword(self.scalars.get(name))) for name in names + custom
        ])

    def _named_types(self, ctx: _ShapeContext) -> list[TSTypeAlias]:
        """Enum and input object types referenced by the documents, sorted by name."""
        declared: dict[str, TSTypeAlias] = {}
        pending = sorted(ctx.inputs)
        while pending:
            name = pending.pop()
            if name in declared:
                continue
            input_type = ctx.schema.get_type(name)
            members = [
                TSPropertySignature(
                    field_name,
                    self._input_type(ctx, input_field.type),
                    optional=not is_non_null_type(input_field.type),
                )
                for field_name, input_field in input_type.fields.items()
            ]
            declared[name] = TSTypeAlias(name, TSTypeLiteral(members))
            # nested input objects are registered while rendering members
            pending.extend(sorted(ctx.inputs - set(declared)))

        for name in ctx.enums:
            enum_type = ctx.schema.get_type(name)
            declared[name] = TSTypeAlias(
                name, TSUnionType([TSLiteralType(value) for value in enum_type.values])
            )
        return [declared[name] for name in sorted(declared)]

    def _operation_shapes(
        self, ctx: _ShapeContext, definition: OperationDefinitionNode
    ) -> list[TSTypeAlias]:
        if definition.name is None:
            raise ShapeGenerationError("Operations must have a name to generate shapes")
        name = definition.name.value
        operation = definition.operation.value
        ctx.document_name = name

        root_type = {
            "query": ctx.schema.query_type,
            "mutation": ctx.schema.mutation_type,
            "subscription": ctx.schema.subscription_type,
        }.get(operation)
        if root_type is None:
            raise ShapeGenerationError(f"Schema has no {operation} type (document: {name})")

        if definition.variable_definitions:
            variables: TSType = TSTypeLiteral(
                [self._variable_member(ctx, v) for v in definition.variable_definitions]
            )
        else:
            variables = TSTypeReference("Record", [TSKeyword("string"), TSKeyword("never")])

        return [
            TSTypeAlias(variables_type_name(name, operation), variables),
            TSTypeAlias(
                shape_type_name(name, operation),
                self._selection_shape(ctx, root_type, definition.selection_set),
            ),
        ]

    def _fragment_shape(self, ctx: _ShapeContext, definition: FragmentDefinitionNode) -> TSTypeAlias:
        name = definition.name.value
        ctx.document_name = name
        parent = ctx.schema.get_type(definition.type_condition.name.value)
        if parent is None:
            raise ShapeGenerationError(
                f"Unknown type {definition.type_condition.name.value!r} (document: {name})"
            )
        return TSTypeAlias(
            fragment_shape_name(name), self._selection_shape(ctx, parent, definition.selection_set)
        )

    def _variable_member(self, ctx: _ShapeContext, variable) -> TSPropertySignature:
        var_type = type_from_ast(ctx.schema, variable.type)
        if var_type is None:
            raise ShapeGenerationError(
                f"Unknown type for variable ${variable.variable.name.value} "
                f"(document: {ctx.document_name})"
            )
        return TSPropertySignature(
            variable.variable.name.value,
            self._input_type(ctx, var_type),
            optional=not is_non_null_type(var_type),
        )

    def _input_type(self, ctx: _ShapeContext, type_) -> TSType:
        if is_non_null_type(type_):
            return self._unwrapped_input_type(ctx, type_.of_type)
        return _maybe(self._unwrapped_input_type(ctx, type_))

    def _unwrapped_input_type(self, ctx: _ShapeContext, type_) -> TSType:
        if is_list_type(type_):
            return TSTypeReference("Array", [self._input_type(ctx, type_.of_type)])
        if is_input_object_type(type_):
            ctx.inputs.add(type_.name)
            return TSTypeReference(type_.name)
        return self._leaf_type(ctx, type_)

    def _leaf_type(self, ctx: _ShapeContext, type_) -> TSType:
        if is_enum_type(type_):
            ctx.enums.add(type_.name)
            return TSTypeReference(type_.name)
        return TSIndexedAccess("Scalars", type_.name)

    def _output_type(self, ctx: _ShapeContext, type_, selection_set: SelectionSetNode | None) -> TSType:
        if is_non_null_type(type_):
            return self._unwrapped_output_type(ctx, type_.of_type, selection_set)
        return _maybe(self._unwrapped_output_type(ctx, type_, selection_set))

    def _unwrapped_output_type(self, ctx: _ShapeContext, type_, selection_set) -> TSType:
        if is_list_type(type_):
            return TSTypeReference("Array", [self._output_type(ctx, type_.of_type, selection_set)])
        if selection_set is None:
            return self._leaf_type(ctx, type_)
        return self._selection_shape(ctx, type_, selection_set)

    def _selection_shape(self, ctx: _ShapeContext, parent, selection_set: SelectionSetNode) -> TSTypeLiteral:
        members: dict[str, TSPropertySignature] = {}
        fragments: list[str] = []
        self._collect_members(ctx, parent, selection_set, members, fragments, optional=False)

        shape = TSTypeLiteral(list(members.values()))
        if fragments:
            shape.members.append(
                TSPropertySignature(
                    FRAGMENT_KEY,
                    TSTypeLiteral([TSPropertySignature(name, TSLiteralType(True)) for name in fragments]),
                )
            )
        return shape

    def _collect_members(
        self,
        ctx: _ShapeContext,
        parent,
        selection_set: SelectionSetNode,
        members: dict[str, TSPropertySignature],
        fragments: list[str],
        optional: bool,
    ):
        """Walk a selection set, adding fields to members and spreads to fragments."""
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                member = self._field_member(ctx, parent, selection, optional)
                existing = members.get(member.key)
                # a required selection wins over an optional one for the same key
                if existing is None or (existing.optional and not member.optional):
                    members[member.key] = member
            elif isinstance(selection, InlineFragmentNode):
                condition = parent
                if selection.type_condition is not None:
                    condition = ctx.schema.get_type(selection.type_condition.name.value)
                    if condition is None:
                        raise ShapeGenerationError(
                            f"Unknown type {selection.type_condition.name.value!r} "
                            f"(document: {ctx.document_name})"
                        )
                self._collect_members(
                    ctx, condition, selection.selection_set, members, fragments,
                    optional=optional or condition is not parent,
                )
            elif isinstance(selection, FragmentSpreadNode):
                name = selection.name.value
                if self.fragment_masking:
                    if name not in fragments:
                        fragments.append(name)
                    continue
                fragment = ctx.fragments.get(name)
                if fragment is None:
                    raise ShapeGenerationError(
                        f"Unknown fragment {name!r} (document: {ctx.document_name})"
                    )
                condition = ctx.schema.get_type(fragment.type_condition.name.value)
                self._collect_members(
                    ctx, condition, fragment.selection_set, members, fragments,
                    optional=optional or condition is not parent,
                )

    def _field_member(self, ctx: _ShapeContext, parent, node: FieldNode, optional: bool) -> TSPropertySignature:
        name = node.name.value
        key = node.alias.value if node.alias else name

        if name == "__typename":
            if is_object_type(parent):
                return TSPropertySignature(key, TSLiteralType(parent.name), optional=optional)
            return TSPropertySignature(key, TSKeyword("string"), optional=optional)

        field_def = getattr(parent, "fields", {}).get(name)
        if field_def is None:
            raise ShapeGenerationError(
                f"Unknown field {parent.name}.{name} (document: {ctx.document_name})"
            )
        return TSPropertySignature(
            key, self._output_type(ctx, field_def.type, node.selection_set), optional=optional
        )
