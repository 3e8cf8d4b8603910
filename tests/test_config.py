"""Tests for configuration loading."""

from pathlib import Path

import pytest
from graphql import DirectiveNode, NameNode

from gql_tsgen.config import (
    DEFAULT_INTERNAL_DIRECTIVES,
    ConfigurationError,
    TypegenConfig,
    find_config,
    load_config,
)


def directive(name: str) -> DirectiveNode:
    return DirectiveNode(name=NameNode(value=name), arguments=())


class TestTypegenConfig:
    """Tests for derived paths and the internal directive predicate."""

    def test_defaults(self):
        config = TypegenConfig()
        assert config.output_dir == Path("generated")
        assert config.fragment_masking
        assert config.internal_directives == DEFAULT_INTERNAL_DIRECTIVES

    def test_paths(self):
        config = TypegenConfig(output_dir=Path("/out"))
        assert config.artifact_dir == Path("/out/artifacts")
        assert config.internal_type_definition_file == Path("/out/artifacts/_internal.d.ts")
        assert config.type_index_path == Path("/out/index.d.ts")
        assert config.artifact_type_path("Hello") == Path("/out/artifacts/Hello.d.ts")

    def test_is_internal_directive(self):
        config = TypegenConfig(internal_directives=["list"])
        assert config.is_internal_directive(directive("list"))
        assert not config.is_internal_directive(directive("include"))

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValueError):
            TypegenConfig(unknown=True)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yml") == TypegenConfig()

    def test_none_gives_defaults(self):
        assert load_config(None) == TypegenConfig()

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "gql-tsgen.yml"
        path.write_text(
            "output_dir: src/generated\n"
            "internal_directives: [list, when]\n"
            "scalars:\n"
            "  DateTime: string\n"
            "header: // generated\n"
        )
        config = load_config(path)
        assert config.output_dir == tmp_path.resolve() / "src/generated"
        assert config.internal_directives == ["list", "when"]
        assert config.scalars == {"DateTime": "string"}
        assert config.header == "// generated"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "gql-tsgen.yml"
        path.write_text("")
        assert load_config(path) == TypegenConfig()

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "gql-tsgen.yml"
        path.write_text("fragment_masking: true\n")
        config = load_config(path, fragment_masking=False, output_dir=Path("/elsewhere"), header=None)
        assert not config.fragment_masking
        assert config.output_dir == Path("/elsewhere")
        assert config.header is None

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "gql-tsgen.yml"
        path.write_text("output_dir: [unclosed\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.path == path

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "gql-tsgen.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_validation_errors(self, tmp_path):
        path = tmp_path / "gql-tsgen.yml"
        path.write_text("fragment_masking: maybe\nbogus: 1\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert len(exc_info.value.errors) == 2
        assert "fragment_masking" in str(exc_info.value)
        assert str(path) in str(exc_info.value)


class TestFindConfig:
    def test_finds_default_name(self, tmp_path):
        (tmp_path / "gql-tsgen.yaml").write_text("")
        assert find_config(tmp_path) == tmp_path / "gql-tsgen.yaml"

    def test_nothing_found(self, tmp_path):
        assert find_config(tmp_path) is None
