"""Typed TypeScript artifacts for GraphQL documents."""

__version__ = "0.1.0"
