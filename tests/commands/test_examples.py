"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from mtactl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["add", "--examples"], ["mtactl add module", "--no-check"]),
    (["get", "--examples"], ["mtactl get modules", "mtactl --json get resources"]),
    (["create", "--examples"], ["mtactl create -p mta.yaml"]),
    (["hash", "--examples"], ["mtactl -q hash"]),
    (["copy", "--examples"], ["mtactl copy -s"]),
    (["delete", "--examples"], ["mtactl delete"]),
    (["validate", "--examples"], ["--strict"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


class TestExamplesInHelp:
    @pytest.mark.parametrize(
        "args",
        [
            ["add", "--help"],
            ["get", "--help"],
            ["create", "--help"],
            ["hash", "--help"],
            ["validate", "--help"],
        ],
    )
    def test_examples_in_help(self, cli_runner: CliRunner, args: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "--examples" in result.output


class TestExamplesEagerExit:
    def test_examples_skips_required_options(self, cli_runner: CliRunner) -> None:
        # 'create' requires --data, but --examples should work without it
        result = cli_runner.invoke(cli, ["create", "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output

    def test_examples_skips_required_options_copy(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["copy", "--examples"])
        assert result.exit_code == 0
