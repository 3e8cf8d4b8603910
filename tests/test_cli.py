"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from conftest import SCHEMA_SDL
from gql_tsgen.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A project with a schema file and a directory of documents."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "schema.graphql").write_text(SCHEMA_SDL)
    src = tmp_path / "src"
    src.mkdir()
    (src / "hello.graphql").write_text("query Hello($name: String) { hello(name: $name) }\n")
    (src / "user.graphql").write_text(
        "query UserPage($id: ID!) { user(id: $id) { ...UserInfo } }\n"
        "fragment UserInfo on User { id name }\n"
    )
    return tmp_path


class TestGenerate:
    """Tests for the generate command."""

    def test_generates_files(self, runner, project):
        result = runner.invoke(
            main,
            ["generate", "-s", "schema.graphql", "-d", "src", "-o", str(project / "generated")],
        )

        assert result.exit_code == 0, result.output
        assert "Done! Generated 3 artifacts" in result.output
        generated = project / "generated"
        assert (generated / "index.d.ts").is_file()
        assert (generated / "artifacts" / "_internal.d.ts").is_file()
        for name in ("Hello", "UserPage", "UserInfo"):
            assert (generated / "artifacts" / f"{name}.d.ts").is_file()

    def test_uses_config_file(self, runner, project):
        (project / "gql-tsgen.yml").write_text(
            "output_dir: types\nheader: // Generated by gql-tsgen\n"
        )
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "-d", "src"])

        assert result.exit_code == 0, result.output
        index = (project / "types" / "index.d.ts").read_text()
        assert index.startswith("// Generated by gql-tsgen\n\n")

    def test_verbose_lists_counts(self, runner, project):
        result = runner.invoke(
            main,
            ["generate", "-s", "schema.graphql", "-d", "src", "-o", str(project / "out"), "-v"],
        )

        assert result.exit_code == 0, result.output
        assert "Operations: 2" in result.output
        assert "Fragments: 1" in result.output

    def test_invalid_document_fails(self, runner, project):
        (project / "src" / "broken.graphql").write_text("query Broken {")
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "-d", "src"])

        assert result.exit_code != 0
        assert "Error parsing" in result.output

    def test_invalid_config_fails(self, runner, project):
        (project / "gql-tsgen.yml").write_text("unknown_option: true\n")
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "-d", "src"])

        assert result.exit_code != 0
        assert "Invalid configuration" in result.output

    def test_malformed_introspection_fails_cleanly(self, runner, project):
        (project / "schema.json").write_text("{not json")
        result = runner.invoke(main, ["generate", "-s", "schema.json", "-d", "src"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid introspection result" in result.output

    def test_missing_schema_fails(self, runner, project):
        result = runner.invoke(main, ["generate", "-s", "missing.graphql", "-d", "src"])

        assert result.exit_code != 0


class TestScrub:
    """Tests for the scrub command."""

    def test_removes_internal_directives(self, runner, project):
        (project / "friends.graphql").write_text(
            "query Friends($parent: ID) { users @list(name: \"F\") @parentID(value: $parent) { id } }\n"
        )
        result = runner.invoke(main, ["scrub", "friends.graphql"])

        assert result.exit_code == 0, result.output
        assert "@list" not in result.output
        assert "$parent" not in result.output
        assert "query Friends {" in result.output

    def test_custom_directive_list(self, runner, project):
        (project / "q.graphql").write_text("query Q { users @custom @list(name: \"F\") { id } }\n")
        result = runner.invoke(main, ["scrub", "q.graphql", "--directive", "custom"])

        assert result.exit_code == 0, result.output
        assert "@custom" not in result.output
        assert "@list" in result.output

    def test_parse_error(self, runner, project):
        (project / "bad.graphql").write_text("query {")
        result = runner.invoke(main, ["scrub", "bad.graphql"])

        assert result.exit_code != 0
        assert "Error parsing bad.graphql" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
