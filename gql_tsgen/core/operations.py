"""Type definitions for query, mutation and subscription documents.

For an operation named Hello the generated file declares:

    Hello$input      the variables (only when the operation has any)
    Hello            { readonly input: ...; readonly result: ... }
    Hello$result     the result shape
    Hello$afterLoad  what a query's load hook receives (queries only)

The shapes themselves live in the internal shape file and are imported
by name (HelloQuery, HelloQueryVariables).
"""

from graphql import GraphQLSchema, OperationDefinitionNode

from .errors import SchemaResolutionError
from .program import (
    NULL,
    UNDEFINED,
    TSImportDeclaration,
    TSPropertySignature,
    TSTypeAlias,
    TSTypeLiteral,
    TSTypeReference,
    TSUnionType,
    TypedProgram,
)

DEFAULT_INTERNAL_MODULE = "./_internal"


def input_type_name(name: str) -> str:
    return f"{name}$input"


def result_type_name(name: str) -> str:
    return f"{name}$result"


def after_load_type_name(name: str) -> str:
    return f"{name}$afterLoad"


def shape_type_name(name: str, operation: str) -> str:
    """Name of the internal shape for an operation, e.g. HelloQuery."""
    return name + operation[0].upper() + operation[1:]


def variables_type_name(name: str, operation: str) -> str:
    return shape_type_name(name, operation) + "Variables"


def _readonly(key: str, type_) -> TSPropertySignature:
    return TSPropertySignature(key, type_, readonly=True)


def _resolve_root_type(schema: GraphQLSchema, operation: str):
    if operation == "query":
        return schema.query_type
    if operation == "mutation":
        return schema.mutation_type
    if operation == "subscription":
        return schema.subscription_type
    return None


def synthesize_operation(
    schema: GraphQLSchema,
    definition: OperationDefinitionNode,
    internal_module: str = DEFAULT_INTERNAL_MODULE,
) -> TypedProgram:
    """Build the type-definition program for an operation definition.

    Args:
        schema: The schema the operation was written against
        definition: The operation as authored (not scrubbed)
        internal_module: Import path of the internal shape file

    Raises:
        SchemaResolutionError: If the schema has no root type for the operation kind
    """
    name = definition.name.value
    operation = definition.operation.value

    if _resolve_root_type(schema, operation) is None:
        raise SchemaResolutionError(f"Could not find root type for {operation}", name)

    has_inputs = bool(definition.variable_definitions)
    input_name = input_type_name(name)
    result_name = result_type_name(name)

    shape_name = shape_type_name(name, operation)
    program = TypedProgram()
    program.body.append(TSImportDeclaration([shape_name], internal_module))

    if has_inputs:
        variables_name = variables_type_name(name, operation)
        program.body.append(TSImportDeclaration([variables_name], internal_module))
        program.body.append(TSTypeAlias(input_name, TSTypeReference(variables_name)))

    # mutations always have a result once they resolve; queries and
    # subscriptions have nothing until the first payload arrives
    if operation == "mutation":
        result_type = TSTypeReference(result_name)
    else:
        result_type = TSUnionType([TSTypeReference(result_name), UNDEFINED])

    program.body.append(
        TSTypeAlias(
            name,
            TSTypeLiteral([
                _readonly("input", TSTypeReference(input_name) if has_inputs else NULL),
                _readonly("result", result_type),
            ]),
        )
    )
    program.body.append(TSTypeAlias(result_name, TSTypeReference(shape_name)))

    if operation == "query":
        members = [
            _readonly("data", TSTypeLiteral([_readonly(name, TSTypeReference(result_name))])),
        ]
        if has_inputs:
            members.insert(
                0, _readonly("input", TSTypeLiteral([_readonly(name, TSTypeReference(input_name))]))
            )
        program.body.append(TSTypeAlias(after_load_type_name(name), TSTypeLiteral(members)))

    return program
