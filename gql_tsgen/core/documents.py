"""Collected GraphQL documents.

A collected document is one named operation or fragment together with the
document it lives in. The collection stage decides which documents need a
store and which need a typed artifact; the generator only reads the flags.
"""

from dataclasses import dataclass, field
from enum import Enum

from graphql import DocumentNode


class DocumentKind(str, Enum):
    """Kinds of collected documents."""
    OPERATION = "operation"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class CollectedDocument:
    """A named operation or fragment picked up by the collection stage."""
    name: str
    kind: DocumentKind
    # The document handed over for code generation; this is what gets scrubbed
    document: DocumentNode
    # The document as authored. Types are always derived from this one.
    original_document: DocumentNode | None = field(default=None)
    generate_store: bool = True
    generate_artifact: bool = True

    def __post_init__(self):
        if self.original_document is None:
            # frozen dataclass, so bypass __setattr__
            object.__setattr__(self, "original_document", self.document)
