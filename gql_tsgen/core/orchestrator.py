"""Drives a type generation run.

A run has three steps:

1. Scrub every document that needs a store and generate the internal
   shapes for the whole batch at once.
2. Generate and write one type-definition artifact per document that
   needs one, concurrently. Artifacts are built from the original
   documents, never the scrubbed ones.
3. Write the index manifest re-exporting every artifact.

Any failure aborts the run. Files already written stay on disk.
"""

import asyncio
from pathlib import Path

from graphql import (
    DocumentNode,
    FragmentDefinitionNode,
    GraphQLSchema,
    OperationDefinitionNode,
)

from ..config import TypegenConfig
from ..logging import get_logger
from .documents import CollectedDocument, DocumentKind
from .errors import DefinitionLookupError, TypegenError
from .fragments import synthesize_fragment
from .hooks import AddHeaderHook, HookRunner
from .index import compose_index, module_specifier
from .operations import synthesize_operation
from .printer import ProgramPrinter
from .program import TypedProgram
from .scalars import ScalarRegistry
from .scrubber import scrub_document
from .shapes import ShapeGenerator, TypeScriptShapeGenerator
from .writer import DiskWriter, FileWriter

logger = get_logger("orchestrator")


def find_definition(
    document: DocumentNode, name: str, kind: DocumentKind
) -> OperationDefinitionNode | FragmentDefinitionNode:
    """Find the definition a collected document refers to.

    Raises:
        DefinitionLookupError: If the document has no definition of that name and kind
    """
    node_type = OperationDefinitionNode if kind == DocumentKind.OPERATION else FragmentDefinitionNode
    for definition in document.definitions:
        if isinstance(definition, node_type) and definition.name and definition.name.value == name:
            return definition
    raise DefinitionLookupError(name, kind.value)


class TypeGenerator:
    """Generates the typed artifacts for a set of collected documents.

    Example:
        generator = TypeGenerator(config, schema)
        paths = asyncio.run(generator.generate(documents))
    """

    def __init__(
        self,
        config: TypegenConfig,
        schema: GraphQLSchema,
        shape_generator: ShapeGenerator | None = None,
        writer: FileWriter | None = None,
        hooks: HookRunner | None = None,
    ):
        """Initialize the generator.

        Args:
            config: Settings of the run
            schema: The schema every document was written against
            shape_generator: Produces the internal shapes; defaults to the built-in generator
            writer: Persists generated text; defaults to writing to disk
            hooks: Pre/post generation hooks. A configured header is added as a post hook.
        """
        self.config = config
        self.schema = schema
        self.printer = ProgramPrinter(config.template_dir)
        self.shape_generator = shape_generator or TypeScriptShapeGenerator(
            scalars=ScalarRegistry(config.scalars),
            fragment_masking=config.fragment_masking,
            printer=self.printer,
        )
        self.writer = writer or DiskWriter()
        self.hooks = hooks or HookRunner()
        if config.header:
            self.hooks.add_post_hook(AddHeaderHook(config.header))

    async def generate(self, documents: list[CollectedDocument]) -> list[Path]:
        """Run the whole pipeline.

        Returns:
            Paths of the per-document artifacts, in document order
        """
        documents = self.hooks.run_pre_hooks(list(documents))
        logger.info("Generating types for %d documents", len(documents))

        artifact_documents = [doc for doc in documents if doc.generate_artifact]
        self._check_artifact_paths(artifact_documents)

        await self.generate_shapes(documents)

        # gather keeps launch order, so the index is stable across runs.
        # Every task runs to completion before the first failure is raised.
        results = await asyncio.gather(
            *(self.generate_artifact(doc) for doc in artifact_documents),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        paths = list(results)

        await self._write(self.config.type_index_path, self.print_index(paths))
        logger.info("Wrote %d artifacts and %s", len(paths), self.config.type_index_path)
        return paths

    def _check_artifact_paths(self, documents: list[CollectedDocument]):
        """Fail before anything is written if two documents share an artifact path."""
        owners: dict[Path, CollectedDocument] = {}
        for doc in documents:
            path = self.config.artifact_type_path(doc.name)
            other = owners.setdefault(path, doc)
            if other is not doc:
                raise TypegenError(
                    f"{other.kind.value} {other.name!r} and {doc.kind.value} {doc.name!r} "
                    f"would both be written to {path}"
                )

    async def generate_shapes(self, documents: list[CollectedDocument]) -> str:
        """Scrub the store documents and write the internal shape file."""
        scrubbed: list[DocumentNode] = []
        seen: set[int] = set()
        for doc in documents:
            # several collected documents can share one file's document
            if not doc.generate_store or id(doc.document) in seen:
                continue
            seen.add(id(doc.document))
            scrubbed.append(scrub_document(doc.document, self.config.is_internal_directive))

        logger.debug("Generating internal shapes for %d documents", len(scrubbed))
        text = self.shape_generator.generate(scrubbed, self.schema)
        await self._write(self.config.internal_type_definition_file, text)
        return text

    def build_program(self, doc: CollectedDocument, path: Path) -> TypedProgram:
        """Build the artifact program of one document to be written at path."""
        definition = find_definition(doc.original_document, doc.name, doc.kind)
        internal_module = module_specifier(path.parent, self.config.internal_type_definition_file)
        if isinstance(definition, OperationDefinitionNode):
            return synthesize_operation(self.schema, definition, internal_module)
        return synthesize_fragment(self.schema, definition, internal_module)

    async def generate_artifact(self, doc: CollectedDocument) -> Path:
        """Write the type definitions of one document and return their path."""
        path = self.config.artifact_type_path(doc.name)
        program = self.build_program(doc, path)
        await self._write(path, self.printer.print_program(program))
        logger.debug("Wrote %s", path)
        return path

    def print_index(self, paths: list[Path]) -> str:
        return self.printer.print_index(compose_index(paths, self.config.type_index_path))

    async def _write(self, path: Path, text: str):
        await self.writer.write(path, self.hooks.run_post_hooks(str(path), text))
