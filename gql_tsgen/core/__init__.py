"""Core modules for GraphQL type generation."""

from .documents import CollectedDocument, DocumentKind
from .errors import (
    ArtifactWriteError,
    DefinitionLookupError,
    SchemaResolutionError,
    ShapeGenerationError,
    TypegenError,
)
from .fragments import FRAGMENT_KEY, synthesize_fragment
from .hooks import (
    AddHeaderHook,
    FilterDocumentsHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .index import compose_index, module_specifier
from .loader import collect_documents, load_schema
from .operations import synthesize_operation
from .orchestrator import TypeGenerator, find_definition
from .printer import ProgramPrinter
from .program import IndexManifest, TypedProgram
from .scalars import ScalarRegistry
from .scrubber import scrub_document
from .shapes import ShapeGenerator, TypeScriptShapeGenerator
from .writer import DiskWriter, FileWriter

__all__ = [
    # Documents
    "CollectedDocument",
    "DocumentKind",
    # Errors
    "ArtifactWriteError",
    "DefinitionLookupError",
    "SchemaResolutionError",
    "ShapeGenerationError",
    "TypegenError",
    # Scrubbing
    "scrub_document",
    # Synthesis
    "FRAGMENT_KEY",
    "synthesize_fragment",
    "synthesize_operation",
    "compose_index",
    "module_specifier",
    "IndexManifest",
    "TypedProgram",
    "ProgramPrinter",
    # Shapes
    "ScalarRegistry",
    "ShapeGenerator",
    "TypeScriptShapeGenerator",
    # Hooks
    "AddHeaderHook",
    "FilterDocumentsHook",
    "HookRunner",
    "PostGenerateHook",
    "PreGenerateHook",
    # Loading and writing
    "collect_documents",
    "load_schema",
    "DiskWriter",
    "FileWriter",
    # Orchestration
    "TypeGenerator",
    "find_definition",
]
