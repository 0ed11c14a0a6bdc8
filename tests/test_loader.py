"""Tests for manifest discovery and decoding."""

from __future__ import annotations

from pathlib import Path

import pytest

from arc_config_validator.config import ValidatorConfig
from arc_config_validator.exceptions import EnvironmentFailure
from arc_config_validator.parsing import YamlLoader, build_source_maps, decode_embedded

from conftest import BROKEN_YAML, CLEAN_POLICY, CLEAN_RUNNER


@pytest.fixture
def loader() -> YamlLoader:
    return YamlLoader(ValidatorConfig())


class TestDiscover:
    def test_recursive_and_sorted(self, loader: YamlLoader, write_manifest) -> None:
        b = write_manifest("runners/b.yaml", CLEAN_RUNNER)
        a = write_manifest("runners/a.yml", CLEAN_RUNNER)
        nested = write_manifest("org-level/policies/policy.yaml", CLEAN_POLICY)
        write_manifest("README.md", "# not a manifest\n")
        write_manifest("runners/notes.txt", "kind: RunnerDeployment\n")

        files = loader.discover(a.parents[1])

        assert files == sorted([a, b, nested])

    def test_uppercase_extension(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("RUNNER.YAML", CLEAN_RUNNER)
        assert loader.discover(path.parent) == [path]

    def test_empty_directory(self, loader: YamlLoader, tmp_path: Path) -> None:
        assert loader.discover(tmp_path) == []

    def test_missing_directory(self, loader: YamlLoader, tmp_path: Path) -> None:
        with pytest.raises(EnvironmentFailure, match="Directory not found"):
            loader.discover(tmp_path / "missing")

    def test_root_is_a_file(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("runner.yaml", CLEAN_RUNNER)
        with pytest.raises(EnvironmentFailure, match="not a directory"):
            loader.discover(path)

    def test_configured_extensions(self, write_manifest) -> None:
        yaml_path = write_manifest("a.yaml", CLEAN_RUNNER)
        write_manifest("b.yml", CLEAN_RUNNER)
        loader = YamlLoader(ValidatorConfig(extensions=(".yaml",)))
        assert loader.discover(yaml_path.parent) == [yaml_path]


class TestParse:
    def test_single_document(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("runner.yaml", CLEAN_RUNNER)

        documents = loader.parse(path)

        assert len(documents) == 1
        document = documents[0]
        assert document.path == path
        assert document.index is None
        assert document.kind == "RunnerDeployment"
        assert document.parse_error is None
        assert document.raw["metadata"]["name"] == "example-runner"
        assert document.namespace == "arc-runners"
        assert document.source.text == CLEAN_RUNNER

    def test_multi_document(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("bundle.yaml", CLEAN_RUNNER + "---\n" + CLEAN_POLICY)

        documents = loader.parse(path)

        assert [d.index for d in documents] == [0, 1]
        assert [d.kind for d in documents] == ["RunnerDeployment", "ConfigMap"]
        assert all(d.path == path for d in documents)

    def test_parse_error(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("broken.yaml", BROKEN_YAML)

        documents = loader.parse(path)

        assert len(documents) == 1
        assert documents[0].parse_error
        assert documents[0].raw is None
        assert not documents[0].is_parsed

    def test_invalid_utf8(self, loader: YamlLoader, tmp_path: Path) -> None:
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"kind: \xff\xfe\n")

        documents = loader.parse(path)

        assert "UTF-8" in documents[0].parse_error

    def test_empty_file(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("empty.yaml", "")

        documents = loader.parse(path)

        assert len(documents) == 1
        assert documents[0].raw is None
        assert documents[0].kind is None
        assert documents[0].is_parsed

    def test_line_endings_preserved(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("crlf.yaml", "kind: ConfigMap\r\n")
        assert loader.parse(path)[0].source.text == "kind: ConfigMap\r\n"

    def test_embedded_policy_decoded(self, loader: YamlLoader, write_manifest) -> None:
        path = write_manifest("policy.yaml", CLEAN_POLICY)

        document = loader.parse(path)[0]

        assert document.embedded["policy.yaml"] == {
            "runner": {"securityContext": {"runAsNonRoot": True}}
        }
        assert document.embedded_errors == {}

    def test_no_decoder(self, tmp_path: Path) -> None:
        path = tmp_path / "runner.json"
        path.write_text("{}", encoding="utf-8")
        loader = YamlLoader(ValidatorConfig(extensions=(".json",)))

        assert not loader.has_decoder(path)
        with pytest.raises(EnvironmentFailure, match="No decoder available"):
            loader.parse(path)

    def test_registered_decoder(self, tmp_path: Path) -> None:
        path = tmp_path / "runner.json"
        path.write_text('{"kind": "ConfigMap"}', encoding="utf-8")
        loader = YamlLoader(ValidatorConfig(extensions=(".json",)))
        loader.register_decoder(".json", lambda content: [({"kind": "ConfigMap"}, {})])

        documents = loader.parse(path)

        assert documents[0].kind == "ConfigMap"


class TestSourceMaps:
    def test_lines_per_document(self) -> None:
        maps = build_source_maps("kind: A\nmetadata:\n  name: a\n---\nkind: B\n")

        assert len(maps) == 2
        assert maps[0]["/metadata/name"]["line"] == 3
        assert maps[1]["/kind"]["line"] == 5

    def test_escaped_keys(self) -> None:
        maps = build_source_maps("data:\n  a/b: 1\n")
        assert maps[0]["/data/a~1b"]["line"] == 2

    def test_compose_failure(self) -> None:
        assert build_source_maps(BROKEN_YAML) == []


class TestDecodeEmbedded:
    def test_only_yaml_keys(self) -> None:
        embedded, errors = decode_embedded({"policy.yaml": "a: 1\n", "notes.txt": "a: 1\n"})
        assert embedded == {"policy.yaml": {"a": 1}}
        assert errors == {}

    def test_invalid_body(self) -> None:
        embedded, errors = decode_embedded({"policy.yaml": "a: [1\n"})
        assert embedded == {}
        assert "policy.yaml" in errors

    def test_non_mapping_data(self) -> None:
        assert decode_embedded(["policy.yaml"]) == ({}, {})
