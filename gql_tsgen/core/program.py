"""Declaration model for generated TypeScript type-definition files.

A TypedProgram is the ordered list of top-level declarations of one
generated file. The printer turns it into text; nothing here knows about
formatting.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass
class TSKeyword:
    """A keyword type such as null, undefined, string or never."""
    name: str


@dataclass
class TSTypeReference:
    """A reference to a named type, optionally with type arguments (Maybe<T>)."""
    name: str
    type_args: list["TSType"] = field(default_factory=list)


@dataclass
class TSIndexedAccess:
    """An indexed access type, e.g. Scalars["ID"]."""
    object_name: str
    index: str


@dataclass
class TSLiteralType:
    """A literal type: true, "RED", 42."""
    value: bool | str | int


@dataclass
class TSUnionType:
    """A union of types, printed in order."""
    types: list["TSType"]


@dataclass
class TSPropertySignature:
    """A member of an object type."""
    key: str
    type: "TSType"
    optional: bool = False
    readonly: bool = False


@dataclass
class TSTypeLiteral:
    """An object type. Member order is preserved."""
    members: list[TSPropertySignature] = field(default_factory=list)


TSType = Union[TSKeyword, TSTypeReference, TSIndexedAccess, TSLiteralType, TSUnionType, TSTypeLiteral]


@dataclass
class TSImportDeclaration:
    """import type { A, B } from "./source";"""
    names: list[str]
    source: str
    type_only: bool = True


@dataclass
class TSTypeAlias:
    """export type Name<T> = ...;"""
    name: str
    type: TSType
    type_params: list[str] = field(default_factory=list)
    exported: bool = True


@dataclass
class TSExportAll:
    """export * from "./source";"""
    source: str


Declaration = Union[TSImportDeclaration, TSTypeAlias]


@dataclass
class TypedProgram:
    """The declarations of one generated type-definition file."""
    body: list[Declaration] = field(default_factory=list)

    @property
    def imports(self) -> list[TSImportDeclaration]:
        return [d for d in self.body if isinstance(d, TSImportDeclaration)]

    @property
    def aliases(self) -> list[TSTypeAlias]:
        return [d for d in self.body if isinstance(d, TSTypeAlias)]

    @property
    def imported_names(self) -> list[str]:
        """Names imported by the program, in import order."""
        return [name for d in self.imports for name in d.names]

    def get_alias(self, name: str) -> TSTypeAlias | None:
        """Look up a declared type alias by name."""
        for alias in self.aliases:
            if alias.name == name:
                return alias
        return None


@dataclass
class IndexManifest:
    """Re-exports of every generated file plus the runtime modules."""
    exports: list[TSExportAll] = field(default_factory=list)

    @property
    def sources(self) -> list[str]:
        return [e.source for e in self.exports]


# Shared keyword instances
NULL = TSKeyword("null")
UNDEFINED = TSKeyword("undefined")
