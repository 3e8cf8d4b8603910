"""Type definitions for fragment documents."""

from graphql import FragmentDefinitionNode, GraphQLSchema

from .errors import SchemaResolutionError
from .operations import DEFAULT_INTERNAL_MODULE
from .program import (
    TSImportDeclaration,
    TSLiteralType,
    TSPropertySignature,
    TSTypeAlias,
    TSTypeLiteral,
    TSTypeReference,
    TypedProgram,
)

# Field that marks a value as carrying a reference to a fragment's masked data
FRAGMENT_KEY = "$fragments"


def data_type_name(name: str) -> str:
    return f"{name}$data"


def fragment_shape_name(name: str) -> str:
    """Name of the internal shape for a fragment, e.g. UserInfoFragment."""
    return f"{name}Fragment"


def synthesize_fragment(
    schema: GraphQLSchema,
    definition: FragmentDefinitionNode,
    internal_module: str = DEFAULT_INTERNAL_MODULE,
) -> TypedProgram:
    """Build the type-definition program for a fragment definition.

    The fragment name becomes the prop type: the value a parent passes down
    to whatever consumes the fragment. Its data lives in <Name>$data.

    Raises:
        SchemaResolutionError: If the type condition is not a type in the schema
    """
    name = definition.name.value
    type_condition = definition.type_condition.name.value
    if schema.get_type(type_condition) is None:
        raise SchemaResolutionError(f"Unknown type condition {type_condition!r}", name)

    shape_name = fragment_shape_name(name)
    data_name = data_type_name(name)

    prop_type = TSTypeLiteral([
        TSPropertySignature("shape", TSTypeReference(data_name), optional=True, readonly=True),
        TSPropertySignature(
            FRAGMENT_KEY,
            TSTypeLiteral([TSPropertySignature(name, TSLiteralType(True))]),
            readonly=True,
        ),
    ])

    return TypedProgram([
        TSImportDeclaration([shape_name], internal_module),
        TSTypeAlias(name, prop_type),
        TSTypeAlias(data_name, TSTypeReference(shape_name)),
    ])
