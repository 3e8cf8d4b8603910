"""Configuration for gql-tsgen.

Settings can come from a YAML file (gql-tsgen.yml by default) and be
overridden from the command line. Relative paths in a config file are
resolved against the file's directory.

Example gql-tsgen.yml:
    output_dir: ./src/generated
    internal_directives: [list, prepend, append, parentID, when]
    scalars:
      DateTime: string
    header: "// Generated by gql-tsgen. Do not edit."
"""

from pathlib import Path
from typing import Any

import yaml
from graphql import DirectiveNode
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_CONFIG_PATHS = ["gql-tsgen.yml", "gql-tsgen.yaml"]

# Directives consumed by the generator itself; they never reach the shape generator
DEFAULT_INTERNAL_DIRECTIVES = [
    "list",
    "prepend",
    "append",
    "parentID",
    "when",
    "when_not",
    "arguments",
    "with",
    "cache",
]


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path:
            msg = f"{msg} (file: {self.path})"
        for error in self.errors:
            location = ".".join(str(part) for part in error.get("loc", ()))
            msg += f"\n  {location}: {error.get('msg')}"
        return msg


class TypegenConfig(BaseModel):
    """Settings for one generation run.

    Attributes:
        output_dir: Root directory of generated files; the index lives here
        artifact_dir_name: Subdirectory of output_dir holding per-document artifacts
        internal_type_definition_file_name: Name of the internal shape file in the artifact directory
        type_index_file_name: Name of the index manifest in output_dir
        internal_directives: Directive names stripped before shape generation
        scalars: TypeScript types for custom scalars
        fragment_masking: Whether fragment spreads are masked in shapes
        template_dir: Directory with templates overriding the built-in ones
        header: Text prepended to every generated file
    """

    model_config = ConfigDict(extra="forbid")

    output_dir: Path = Path("generated")
    artifact_dir_name: str = "artifacts"
    internal_type_definition_file_name: str = "_internal.d.ts"
    type_index_file_name: str = "index.d.ts"
    internal_directives: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INTERNAL_DIRECTIVES)
    )
    scalars: dict[str, str] = Field(default_factory=dict)
    fragment_masking: bool = True
    template_dir: Path | None = None
    header: str | None = None

    @property
    def artifact_dir(self) -> Path:
        return self.output_dir / self.artifact_dir_name

    @property
    def internal_type_definition_file(self) -> Path:
        return self.artifact_dir / self.internal_type_definition_file_name

    @property
    def type_index_path(self) -> Path:
        return self.output_dir / self.type_index_file_name

    def artifact_type_path(self, document_name: str) -> Path:
        """Where the type definitions of a document are written."""
        return self.artifact_dir / f"{document_name}.d.ts"

    def is_internal_directive(self, node: DirectiveNode) -> bool:
        """Check whether a directive is only meaningful to this tool."""
        return node.name.value in self.internal_directives


def find_config(directory: Path) -> Path | None:
    """Return the first default config file present in directory."""
    for name in DEFAULT_CONFIG_PATHS:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Path | None = None, **overrides: Any) -> TypegenConfig:
    """Load configuration from a YAML file, applying overrides on top.

    A missing file yields the defaults. Overrides whose value is None are
    ignored.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    data: dict[str, Any] = {}

    if config_path is not None and Path(config_path).is_file():
        config_path = Path(config_path)
        base_dir = config_path.resolve().parent
        try:
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=config_path) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError("Configuration must be a mapping", path=config_path)
        data.update(loaded)
        for key in ("output_dir", "template_dir"):
            if data.get(key) is not None:
                data[key] = base_dir / data[key]

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return TypegenConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration", errors=e.errors(), path=config_path
        ) from e
