"""TypeScript types for GraphQL scalars.

The built-in shape generator prints every scalar as Scalars["Name"] and
declares the Scalars type from this registry. Scalars without a
registered type map to any.

Example usage:
    from gql_tsgen.core.scalars import ScalarRegistry

    registry = ScalarRegistry()
    registry.register("DateTime", "string")
    registry.register("Cursor", "string")
"""

# GraphQL built-in scalars
BUILTIN_SCALARS = {
    "ID": "string",
    "String": "string",
    "Boolean": "boolean",
    "Int": "number",
    "Float": "number",
}

DEFAULT_SCALAR_TYPE = "any"


class ScalarRegistry:
    """Registry mapping GraphQL scalar names to TypeScript types.

    Example:
        registry = ScalarRegistry({"DateTime": "string"})
        registry.get("DateTime")  # "string"
        registry.get("JSON")      # "any"
    """

    def __init__(self, overrides: dict[str, str] | None = None):
        self._types: dict[str, str] = {}
        self._register_defaults()
        for scalar_name, ts_type in (overrides or {}).items():
            self.register(scalar_name, ts_type)

    def _register_defaults(self):
        """Register the GraphQL built-in scalars."""
        for scalar_name, ts_type in BUILTIN_SCALARS.items():
            self.register(scalar_name, ts_type)

    def register(self, scalar_name: str, ts_type: str):
        """Register the TypeScript type for a scalar."""
        self._types[scalar_name] = ts_type

    def get(self, scalar_name: str) -> str:
        """Get the TypeScript type for a scalar, falling back to any."""
        return self._types.get(scalar_name, DEFAULT_SCALAR_TYPE)

    def has(self, scalar_name: str) -> bool:
        """Check if a type is registered for a scalar."""
        return scalar_name in self._types
