"""Tests for mix execution use-case service."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from schemamix.configuration.runtime_settings import MergeJob, MixerConfiguration
from schemamix.mix_execution.mix_contracts import MixRequest
from schemamix.mix_execution.mix_use_case import (
    MixExecutionError,
    execute_mix_jobs,
    execute_mix_request,
)
from schemamix.mix_execution.schema_composition import GENERATED_BANNER
from schemamix.schema_management.schema_models import ComposedSchema
from schemamix.schema_management.schema_parser import parse_schema_text

_USER_SCHEMA = "model User {\n  id String @id\n}\n"


def _write(path: Path, contents: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return path


def _configuration(tmp_path: Path, *jobs: MergeJob) -> MixerConfiguration:
    return MixerConfiguration(path=tmp_path / "schemamix.config.yaml", jobs=jobs)


def test_output_starts_with_banner_and_overwrites_existing_file(tmp_path: Path) -> None:
    _write(tmp_path / "user.prisma", _USER_SCHEMA)
    output = _write(tmp_path / "out" / "schema.prisma", "stale content that must disappear")
    configuration = _configuration(
        tmp_path, MergeJob(inputs=("user.prisma",), output="out/schema.prisma")
    )

    (outcome,) = execute_mix_jobs(configuration, base_dir=tmp_path)

    text = output.read_text(encoding="utf-8")
    assert outcome.succeeded
    assert outcome.output_path == output
    assert text.splitlines()[0] == GENERATED_BANNER
    assert "stale content" not in text
    assert "model User {" in text


def test_output_directories_are_created(tmp_path: Path) -> None:
    _write(tmp_path / "user.prisma", _USER_SCHEMA)
    configuration = _configuration(
        tmp_path, MergeJob(inputs=("user.prisma",), output="generated/deep/schema.prisma")
    )

    (outcome,) = execute_mix_jobs(configuration, base_dir=tmp_path)

    assert outcome.succeeded
    assert (tmp_path / "generated" / "deep" / "schema.prisma").exists()


def test_job_without_matching_inputs_still_writes_banner(tmp_path: Path) -> None:
    configuration = _configuration(
        tmp_path, MergeJob(inputs=("none/*.prisma",), output="out.prisma")
    )

    (outcome,) = execute_mix_jobs(configuration, base_dir=tmp_path)

    assert outcome.unmatched_patterns == ("none/*.prisma",)
    assert outcome.documents_loaded == 0
    assert (tmp_path / "out.prisma").read_text(encoding="utf-8") == GENERATED_BANNER


def test_failing_job_does_not_abort_following_jobs(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.ERROR)
    _write(tmp_path / "user.prisma", _USER_SCHEMA)
    (tmp_path / "blocked").write_text("a file where a directory is expected", encoding="utf-8")
    configuration = _configuration(
        tmp_path,
        MergeJob(inputs=("user.prisma",), output="blocked/schema.prisma"),
        MergeJob(inputs=("user.prisma",), output="ok.prisma"),
    )

    first, second = execute_mix_jobs(configuration, base_dir=tmp_path)

    assert not first.succeeded
    assert first.error
    assert second.succeeded
    assert (tmp_path / "ok.prisma").exists()
    assert "Failed to write composed schema" in caplog.text


def test_renderer_failure_in_one_job_does_not_abort_following_jobs(
    tmp_path: Path, caplog
) -> None:
    caplog.set_level(logging.ERROR)
    _write(tmp_path / "user.prisma", _USER_SCHEMA)
    calls: list[ComposedSchema] = []

    def render(composed: ComposedSchema) -> str:
        calls.append(composed)
        if len(calls) == 1:
            raise ValueError("renderer rejected schema")
        return "rendered"

    configuration = _configuration(
        tmp_path,
        MergeJob(inputs=("user.prisma",), output="one.prisma"),
        MergeJob(inputs=("user.prisma",), output="two.prisma"),
    )

    first, second = execute_mix_jobs(configuration, base_dir=tmp_path, render=render)

    assert first.error == "renderer rejected schema"
    assert not (tmp_path / "one.prisma").exists()
    assert second.succeeded
    assert (tmp_path / "two.prisma").read_text(encoding="utf-8") == f"{GENERATED_BANNER}\nrendered"
    assert "Mixer for" in caplog.text


def test_unexpected_parser_error_does_not_abort_following_jobs(tmp_path: Path) -> None:
    _write(tmp_path / "broken.prisma", "model Broken {\n  id Int @id\n}\n")
    _write(tmp_path / "user.prisma", _USER_SCHEMA)

    def parse_schema(text: str):
        if "Broken" in text:
            raise RuntimeError("parser crashed")
        return parse_schema_text(text)

    configuration = _configuration(
        tmp_path,
        MergeJob(inputs=("broken.prisma",), output="one.prisma"),
        MergeJob(inputs=("user.prisma",), output="two.prisma"),
    )

    first, second = execute_mix_jobs(configuration, base_dir=tmp_path, parse_schema=parse_schema)

    assert first.error == "parser crashed"
    assert second.succeeded
    assert "model User {" in (tmp_path / "two.prisma").read_text(encoding="utf-8")


def test_invalid_output_path_does_not_abort_following_jobs(tmp_path: Path) -> None:
    _write(tmp_path / "user.prisma", _USER_SCHEMA)
    configuration = _configuration(
        tmp_path,
        MergeJob(inputs=("user.prisma",), output="bad\x00.prisma"),
        MergeJob(inputs=("user.prisma",), output="two.prisma"),
    )

    first, second = execute_mix_jobs(configuration, base_dir=tmp_path)

    assert not first.succeeded
    assert "null byte" in (first.error or "")
    assert second.succeeded
    assert (tmp_path / "two.prisma").exists()


def test_jobs_do_not_share_accumulated_state(tmp_path: Path) -> None:
    _write(tmp_path / "a.prisma", "model A {\n  id Int @id\n}\n")
    _write(tmp_path / "b.prisma", "model B {\n  id Int @id\n}\n")
    configuration = _configuration(
        tmp_path,
        MergeJob(inputs=("a.prisma",), output="a_out.prisma"),
        MergeJob(inputs=("b.prisma",), output="b_out.prisma"),
    )

    execute_mix_jobs(configuration, base_dir=tmp_path)

    second_output = (tmp_path / "b_out.prisma").read_text(encoding="utf-8")
    assert "model B {" in second_output
    assert "model A {" not in second_output


def test_custom_renderer_receives_composed_schema(tmp_path: Path) -> None:
    _write(tmp_path / "user.prisma", _USER_SCHEMA)
    received: list[ComposedSchema] = []

    def render(composed: ComposedSchema) -> str:
        received.append(composed)
        return "rendered"

    configuration = _configuration(tmp_path, MergeJob(inputs=("user.prisma",), output="o.prisma"))
    execute_mix_jobs(configuration, base_dir=tmp_path, render=render)

    assert [model.name for model in received[0].models] == ["User"]
    assert (tmp_path / "o.prisma").read_text(encoding="utf-8") == f"{GENERATED_BANNER}\nrendered"


def test_stub_only_models_are_reported(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.WARNING)
    _write(tmp_path / "post.prisma", "model User {\n  //@stub\n  id String @id\n}\n")
    configuration = _configuration(tmp_path, MergeJob(inputs=("post.prisma",), output="o.prisma"))

    execute_mix_jobs(configuration, base_dir=tmp_path)

    assert "Model User is only declared as a stub" in caplog.text


def test_request_resolves_paths_against_configuration_directory(tmp_path: Path) -> None:
    project = tmp_path / "project"
    _write(project / "prisma" / "user.prisma", _USER_SCHEMA)
    config_path = _write(
        project / "schemamix.config.json",
        json.dumps({"mixers": [{"input": ["prisma/*.prisma"], "output": "schema.prisma"}]}),
    )

    (outcome,) = execute_mix_request(MixRequest(config_path=str(config_path)))

    assert outcome.output_path == project.resolve() / "schema.prisma"
    assert outcome.documents_loaded == 1


def test_request_base_dir_overrides_configuration_directory(tmp_path: Path) -> None:
    elsewhere = tmp_path / "elsewhere"
    _write(elsewhere / "user.prisma", _USER_SCHEMA)
    config_path = _write(
        tmp_path / "config" / "schemamix.config.yaml",
        "mixers:\n  - input: user.prisma\n    output: schema.prisma\n",
    )

    (outcome,) = execute_mix_request(
        MixRequest(config_path=str(config_path), base_dir=str(elsewhere))
    )

    assert outcome.documents_loaded == 1
    assert (elsewhere / "schema.prisma").exists()


def test_request_with_invalid_configuration_raises(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "schemamix.config.yaml", "mixers: []\n")

    with pytest.raises(MixExecutionError, match="at least one mixer"):
        execute_mix_request(MixRequest(config_path=str(config_path)))
