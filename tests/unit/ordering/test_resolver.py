"""
command-order — unit tests for order resolution

File: tests/unit/ordering/test_resolver.py

Purpose
- Validate the two-phase merge of a declared order against the full command set.

What this test file should cover
- Declared prefix, alphabetical remainder, unknown and duplicate ids.
- Completeness and independence from mapping insertion order (property-based).
- Diagnostic side channel: callback and structlog events.
"""

from __future__ import annotations

import random

import pytest
import structlog
from hypothesis import given, settings
from hypothesis import strategies as st

from command_order.ordering import (
    DiagnosticKind,
    OrderDiagnostic,
    resolve_order_ids,
    sort_commands_by_order,
)


def _make_command(command_id: str) -> dict[str, object]:
    return {
        "id": command_id,
        "name": command_id,
        "description": "Test command",
        "slashCommand": "/" + command_id,
    }


def _command_map(*ids: str) -> dict[str, dict[str, object]]:
    return {command_id: _make_command(command_id) for command_id in ids}


def _ids(commands: list[dict[str, object]]) -> list[object]:
    return [command["id"] for command in commands]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("command_ids", "order", "expected"),
    [
        pytest.param(
            ("cmd.a", "cmd.b", "cmd.c"),
            ["cmd.c", "cmd.a", "cmd.b"],
            ["cmd.c", "cmd.a", "cmd.b"],
            id="all-commands-ordered",
        ),
        pytest.param(
            ("cmd.a", "cmd.b", "cmd.c", "cmd.d"),
            ["cmd.c", "cmd.a"],
            ["cmd.c", "cmd.a", "cmd.b", "cmd.d"],
            id="partial-order-alphabetical-fallback",
        ),
        pytest.param(
            ("cmd.a", "cmd.b"),
            ["cmd.x", "cmd.a", "cmd.y"],
            ["cmd.a", "cmd.b"],
            id="unknown-ids-skipped",
        ),
        pytest.param(
            ("cmd.a", "cmd.b"),
            ["cmd.a", "cmd.a", "cmd.b"],
            ["cmd.a", "cmd.b"],
            id="duplicate-ignored",
        ),
        pytest.param(
            ("cmd.b", "cmd.a", "cmd.c"),
            [],
            ["cmd.a", "cmd.b", "cmd.c"],
            id="empty-order-alphabetical",
        ),
        pytest.param((), ["cmd.a", "cmd.b"], [], id="empty-command-map"),
        pytest.param(("cmd.only",), [], ["cmd.only"], id="single-command"),
        pytest.param(
            ("zebra", "alpha", "charlie", "bravo"),
            ["bravo"],
            ["bravo", "alpha", "charlie", "zebra"],
            id="remaining-sorted-after-declared",
        ),
    ],
)
def test_sort_commands_by_order(
    command_ids: tuple[str, ...], order: list[str], expected: list[str]
) -> None:
    commands = _command_map(*command_ids)

    result = sort_commands_by_order(commands, order)

    assert _ids(result) == expected
    assert len(result) == len(commands)
    assert len(set(_ids(result))) == len(result)


@pytest.mark.unit
def test_absent_order_matches_empty_order() -> None:
    commands = _command_map("b", "c", "a")

    assert sort_commands_by_order(commands, None) == sort_commands_by_order(commands, [])


@pytest.mark.unit
def test_remainder_uses_case_sensitive_codepoint_order() -> None:
    commands = _command_map("beta", "Zeta", "alpha", "Alpha", "_under")

    assert _ids(sort_commands_by_order(commands, [])) == [
        "Alpha",
        "Zeta",
        "_under",
        "alpha",
        "beta",
    ]


@pytest.mark.unit
def test_items_are_returned_unmodified() -> None:
    commands = _command_map("cmd.a", "cmd.b")
    originals = {key: dict(value) for key, value in commands.items()}

    result = sort_commands_by_order(commands, ["cmd.b"])

    assert result[0] is commands["cmd.b"]
    assert result[1] is commands["cmd.a"]
    assert commands == originals


@pytest.mark.unit
def test_priority_prefix_then_remainder() -> None:
    result = resolve_order_ids({"d", "c", "b", "a"}, ["a", "b"])

    assert result == ["a", "b", "c", "d"]


@pytest.mark.unit
def test_diagnostics_report_unknown_and_duplicate_ids() -> None:
    diagnostics: list[OrderDiagnostic] = []

    result = resolve_order_ids(
        ["a", "b"], ["x", "a", "a", "y"], on_diagnostic=diagnostics.append
    )

    assert result == ["a", "b"]
    assert diagnostics == [
        OrderDiagnostic(kind=DiagnosticKind.UNKNOWN_ID, command_id="x", position=0),
        OrderDiagnostic(kind=DiagnosticKind.DUPLICATE_ID, command_id="a", position=2),
        OrderDiagnostic(kind=DiagnosticKind.UNKNOWN_ID, command_id="y", position=3),
    ]


@pytest.mark.unit
def test_diagnostics_are_logged_as_structured_events() -> None:
    with structlog.testing.capture_logs() as captured:
        resolve_order_ids(["a"], ["ghost", "a", "a"])

    assert [(entry["event"], entry["log_level"]) for entry in captured] == [
        ("command_order_unknown_id", "warning"),
        ("command_order_duplicate_id", "debug"),
    ]
    assert captured[0]["command_id"] == "ghost"
    assert captured[0]["position"] == 0


@pytest.mark.unit
def test_failing_sink_does_not_abort_resolution() -> None:
    def explode(diagnostic: OrderDiagnostic) -> None:
        raise RuntimeError(f"sink failure for {diagnostic.command_id}")

    with structlog.testing.capture_logs() as captured:
        result = resolve_order_ids(["a", "b"], ["missing", "b"], on_diagnostic=explode)

    assert result == ["b", "a"]
    assert "command_order_diagnostic_sink_failed" in [entry["event"] for entry in captured]


@pytest.mark.unit
def test_end_to_end_scenario_ordering() -> None:
    commands = _command_map(
        "project.feature.implement",
        "project.feature.test",
        "project.feature.document",
        "project.release.build",
        "project.release.deploy",
    )
    order = ["project.release.deploy", "project.release.build", "project.feature.implement"]

    assert _ids(sort_commands_by_order(commands, order)) == [
        "project.release.deploy",
        "project.release.build",
        "project.feature.implement",
        "project.feature.document",
        "project.feature.test",
    ]


_IDS = st.text(alphabet="abcXYZ._-", min_size=1, max_size=6)


@pytest.mark.unit
@settings(max_examples=200, deadline=None)
@given(
    command_ids=st.sets(_IDS, max_size=12),
    order=st.lists(_IDS, max_size=16),
    seed=st.integers(min_value=0, max_value=2**16),
)
def test_resolution_is_complete_and_insertion_order_independent(
    command_ids: set[str], order: list[str], seed: int
) -> None:
    forward = sorted(command_ids)
    shuffled = list(forward)
    random.Random(seed).shuffle(shuffled)

    first = sort_commands_by_order({key: key for key in forward}, order)
    second = sort_commands_by_order({key: key for key in shuffled}, order)

    assert first == second
    assert len(first) == len(command_ids)
    assert set(first) == command_ids

    declared = list(dict.fromkeys(item for item in order if item in command_ids))
    assert first[: len(declared)] == declared
    assert first[len(declared) :] == sorted(command_ids - set(declared))
