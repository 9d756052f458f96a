"""Unit tests for workflow command discovery and front matter parsing."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import structlog
import yaml

from command_order.workflow import build_command_record, discover_commands, parse_front_matter


def _write_command(commands_dir: Path, command_id: str, content: str) -> Path:
    commands_dir.mkdir(parents=True, exist_ok=True)
    path = commands_dir / f"{command_id}.md"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def commands_dir(tmp_path: Path) -> Path:
    return tmp_path / ".claude" / "commands"


@pytest.mark.unit
def test_discover_commands_reads_front_matter(tmp_path: Path, commands_dir: Path) -> None:
    _write_command(
        commands_dir,
        "project.plan",
        "---\ndisplayName: Plan the project\ndescription: Write a plan\n---\n# Plan\n",
    )

    commands = discover_commands(tmp_path)

    assert commands == {
        "project.plan": {
            "id": "project.plan",
            "name": "Plan the project",
            "description": "Write a plan",
            "slashCommand": "/project.plan",
        }
    }


@pytest.mark.unit
def test_discover_commands_skips_order_file_and_other_files(
    tmp_path: Path, commands_dir: Path
) -> None:
    _write_command(commands_dir, "a", "# A\n")
    (commands_dir / "_order.yaml").write_text("commands:\n  - a\n", encoding="utf-8")
    (commands_dir / "notes.txt").write_text("ignored", encoding="utf-8")
    (commands_dir / ".hidden.md").write_text("ignored", encoding="utf-8")
    (commands_dir / "nested.md").mkdir()

    assert sorted(discover_commands(tmp_path)) == ["a"]


@pytest.mark.unit
def test_discover_commands_without_commands_dir(tmp_path: Path) -> None:
    assert discover_commands(tmp_path) == {}


@pytest.mark.unit
def test_invalid_front_matter_keeps_command_with_defaults(
    tmp_path: Path, commands_dir: Path
) -> None:
    _write_command(commands_dir, "broken", "---\ndisplayName: [oops\n---\nbody\n")

    with structlog.testing.capture_logs() as captured:
        commands = discover_commands(tmp_path)

    assert commands["broken"]["name"] == "broken"
    assert commands["broken"]["description"] == ""
    assert [entry["event"] for entry in captured] == ["command_order_front_matter_invalid"]


@pytest.mark.unit
@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_command_symlinked_outside_workflow_is_ignored(tmp_path: Path) -> None:
    outside = tmp_path / "elsewhere.md"
    outside.write_text("# outside\n", encoding="utf-8")
    workflow = tmp_path / "workflow"
    commands_dir = workflow / ".claude" / "commands"
    _write_command(commands_dir, "inside", "# inside\n")
    try:
        (commands_dir / "escape.md").symlink_to(outside)
    except OSError:
        pytest.skip("symlink creation not permitted")

    assert sorted(discover_commands(workflow)) == ["inside"]


@pytest.mark.unit
def test_build_command_record_carries_extra_front_matter() -> None:
    record = build_command_record(
        "cmd.x", {"displayName": "X", "description": "Does x", "icon": "rocket"}
    )

    assert record == {
        "id": "cmd.x",
        "name": "X",
        "description": "Does x",
        "slashCommand": "/cmd.x",
        "icon": "rocket",
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("# no front matter\n", {}, id="none"),
        pytest.param("---\n---\nbody\n", {}, id="empty-block"),
        pytest.param("---\ndisplayName: x\n", {}, id="unterminated"),
        pytest.param("---\ndisplayName: x\n---\n", {"displayName": "x"}, id="mapping"),
        pytest.param("", {}, id="empty-text"),
    ],
)
def test_parse_front_matter(text: str, expected: dict[str, object]) -> None:
    assert parse_front_matter(text) == expected


@pytest.mark.unit
def test_parse_front_matter_rejects_non_mapping() -> None:
    with pytest.raises(ValueError, match="mapping"):
        parse_front_matter("---\n- a\n- b\n---\n")


@pytest.mark.unit
def test_parse_front_matter_propagates_yaml_errors() -> None:
    with pytest.raises(yaml.YAMLError):
        parse_front_matter("---\nkey: [unclosed\n---\n")
