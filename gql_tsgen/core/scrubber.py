"""Scrubbing of internal directives from GraphQL documents.

Directives that only this tool understands must never reach the shape
generator. Removing them can leave variable definitions behind that are
no longer referenced anywhere, so those are dropped too:

    query Q($id: ID!) { field @list(name: $id) }   ->   query Q { field }

The input document is never modified; a new tree is returned.
"""

from typing import Callable

from graphql import DirectiveNode, DocumentNode, Node, VariableDefinitionNode, VariableNode

DirectivePredicate = Callable[[DirectiveNode], bool]


def scrub_document(document: DocumentNode, is_internal_directive: DirectivePredicate) -> DocumentNode:
    """Remove internal directives and the variable definitions only they used."""
    used_variables: set[str] = set()
    without_directives = _strip_directives(document, is_internal_directive, used_variables)
    return _prune_variable_definitions(without_directives, used_variables)


def _strip_directives(
    node: Node,
    is_internal_directive: DirectivePredicate,
    used_variables: set[str],
    defining: bool = False,
) -> Node | None:
    """First pass: copy the tree without internal directives, recording variable uses.

    Children of a removed directive are never visited, so variables that only
    appear in internal directive arguments do not count as used. The variable
    of a VariableDefinition is its declaration, not a use.
    """
    if isinstance(node, DirectiveNode) and is_internal_directive(node):
        return None
    if isinstance(node, VariableNode) and not defining:
        used_variables.add(node.name.value)

    def transform(child: Node, key: str) -> Node | None:
        return _strip_directives(
            child,
            is_internal_directive,
            used_variables,
            defining=isinstance(node, VariableDefinitionNode) and key == "variable",
        )

    return _rebuild(node, transform)


def _prune_variable_definitions(node: Node, used_variables: set[str]) -> Node | None:
    """Second pass: drop variable definitions that nothing references."""
    if isinstance(node, VariableDefinitionNode) and node.variable.name.value not in used_variables:
        return None
    return _rebuild(node, lambda child, _key: _prune_variable_definitions(child, used_variables))


def _rebuild(node: Node, transform: Callable[[Node, str], Node | None]) -> Node:
    """Copy a node, passing every child node through transform.

    A child that transforms to None is removed from its list.
    """
    values = {}
    for key in node.keys:
        value = getattr(node, key, None)
        if isinstance(value, Node):
            value = transform(value, key)
        elif isinstance(value, (list, tuple)):
            value = tuple(
                transformed
                for transformed in (
                    transform(item, key) if isinstance(item, Node) else item for item in value
                )
                if transformed is not None
            )
        values[key] = value
    return node.__class__(**values)
