"""Exceptions raised while generating type definitions.

Every error aborts the whole run. Nothing is retried and files written
before the failure are left on disk.
"""

from pathlib import Path


class TypegenError(Exception):
    """Base class for generation failures."""


class SchemaResolutionError(TypegenError):
    """Raised when a document's root type or type condition is missing from the schema."""

    def __init__(self, message: str, document_name: str):
        self.document_name = document_name
        super().__init__(f"{message} (document: {document_name})")


class DefinitionLookupError(TypegenError):
    """Raised when a collected document's definition is absent from its own document."""

    def __init__(self, document_name: str, kind: str):
        self.document_name = document_name
        self.kind = kind
        super().__init__(f"Could not find {kind} definition named {document_name!r}")


class ShapeGenerationError(TypegenError):
    """Raised by a shape generator when it cannot produce the internal shapes."""


class ArtifactWriteError(TypegenError):
    """Raised when a generated file cannot be written."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")
