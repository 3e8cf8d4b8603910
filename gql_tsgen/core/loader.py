"""Loading schemas and collecting documents from disk.

Schemas are read from SDL files (a single file or every .graphql,
.graphqls and .gql file under a directory) or from an introspection
result in JSON. Documents are collected from .graphql and .gql files;
each named operation or fragment becomes one CollectedDocument.
"""

import json
import os
from pathlib import Path

from graphql import (
    DocumentNode,
    ExecutableDefinitionNode,
    FragmentDefinitionNode,
    GraphQLError,
    GraphQLSchema,
    OperationDefinitionNode,
    build_ast_schema,
    build_client_schema,
    parse,
)

from ..logging import get_logger
from .documents import CollectedDocument, DocumentKind
from .errors import TypegenError

logger = get_logger("loader")

SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")
DOCUMENT_EXTENSIONS = (".graphql", ".gql")


def _collect_files(path: Path, extensions: tuple[str, ...]) -> list[Path]:
    """Collect all files with the given extensions from path."""
    if path.is_file():
        return [path] if path.name.endswith(extensions) else []
    files = []
    for root, _, filenames in os.walk(path):
        for filename in filenames:
            if filename.endswith(extensions):
                files.append(Path(root) / filename)
    return sorted(files)


def load_schema(path: str | Path) -> GraphQLSchema:
    """Load a schema from SDL files or an introspection JSON file.

    Raises:
        TypegenError: If nothing could be loaded or the schema is invalid
    """
    path = Path(path)
    if path.is_file() and path.suffix == ".json":
        try:
            introspection = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(introspection, dict):
                raise TypeError("expected a JSON object")
            # accept a raw execution result as well as the bare data
            introspection = introspection.get("data", introspection)
            return build_client_schema(introspection)
        except (json.JSONDecodeError, GraphQLError, TypeError) as e:
            raise TypegenError(f"Invalid introspection result in {path}: {e}") from e

    files = _collect_files(path, SCHEMA_EXTENSIONS)
    if not files:
        raise TypegenError(f"No schema files found at {path}")

    source = "\n".join(f.read_text(encoding="utf-8") for f in files)
    try:
        return build_ast_schema(parse(source))
    except (GraphQLError, TypeError) as e:
        raise TypegenError(f"Invalid schema at {path}: {e}") from e


def _is_executable(document: DocumentNode) -> bool:
    return any(isinstance(d, ExecutableDefinitionNode) for d in document.definitions)


def collect_documents(path: str | Path, exclude: list[Path] | None = None) -> list[CollectedDocument]:
    """Collect every named operation and fragment under path.

    Files holding only type-system definitions (such as the schema itself)
    are skipped, as is anything listed in exclude.

    Raises:
        TypegenError: If a file fails to parse or a name is used twice for the same kind
    """
    excluded = {Path(p).resolve() for p in exclude or []}
    documents: list[CollectedDocument] = []
    # artifacts are named after the document, so names are unique across kinds too
    seen: dict[str, DocumentKind] = {}

    for file_path in _collect_files(Path(path), DOCUMENT_EXTENSIONS):
        if file_path.resolve() in excluded:
            continue
        try:
            document = parse(file_path.read_text(encoding="utf-8"))
        except GraphQLError as e:
            raise TypegenError(f"Error parsing {file_path}: {e}") from e
        if not _is_executable(document):
            continue

        for definition in document.definitions:
            if isinstance(definition, OperationDefinitionNode):
                kind = DocumentKind.OPERATION
            elif isinstance(definition, FragmentDefinitionNode):
                kind = DocumentKind.FRAGMENT
            else:
                continue
            if definition.name is None:
                logger.warning("Skipping anonymous operation in %s", file_path)
                continue

            name = definition.name.value
            if name in seen:
                if seen[name] == kind:
                    raise TypegenError(f"Duplicate {kind.value} name {name!r} in {file_path}")
                raise TypegenError(
                    f"Name {name!r} in {file_path} is used by both an operation and a fragment"
                )
            seen[name] = kind
            documents.append(CollectedDocument(name=name, kind=kind, document=document))

    return documents
