"""Tests for the command-line interface."""

import json
import textwrap
import uuid
from pathlib import Path

import pytest
from click.testing import CliRunner

from gql_pyschema.cli import main

SCHEMA_SOURCE = textwrap.dedent(
    '''
    from typing import Annotated

    from gql_pyschema import Int, Void, arg, field, mutation, object_type, query, resolver


    class Counter:
        def __init__(self):
            self.value = 0


    @object_type
    class Total:
        value: int = field(lambda: Int, {"comment": "Current total"})


    @resolver
    class Root:
        def __init__(self, counter: Counter):
            self.counter = counter

        @query(lambda: Total)
        def total(self) -> Total:
            return {"value": self.counter.value}

        @query(lambda: str)
        def echo(self, text: Annotated[str, arg("text")], unused) -> str:
            return text

        @mutation(lambda: Void)
        def add(self, amount: Annotated[int, arg("amount")]) -> None:
            self.counter.value += amount
    '''
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def schema_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable module declaring a resolver and return its name."""
    name = f"cli_schema_{uuid.uuid4().hex}"
    (tmp_path / f"{name}.py").write_text(SCHEMA_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


class TestSdl:
    """Tests for the sdl command."""

    def test_prints_schema(self, runner, schema_module):
        result = runner.invoke(main, ["sdl", "-m", schema_module, "-r", "Root"])
        assert result.exit_code == 0, result.output
        assert "type RootQuery" in result.output
        assert "type RootMutation" in result.output
        assert "Current total" in result.output

    def test_writes_file(self, runner, schema_module, tmp_path):
        out = tmp_path / "out" / "schema.graphql"
        result = runner.invoke(main, ["sdl", "-m", schema_module, "-r", "Root", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Done! Wrote schema to" in result.output
        assert "type Total" in out.read_text()

    def test_strict_args(self, runner, schema_module):
        result = runner.invoke(main, ["sdl", "-m", schema_module, "-r", "Root", "--strict-args"])
        assert result.exit_code == 1
        assert "no arg declared for parameter 1" in result.output

    def test_unknown_module(self, runner):
        result = runner.invoke(main, ["sdl", "-m", "no_such_module_here", "-r", "Root"])
        assert result.exit_code != 0
        assert isinstance(result.exception, ModuleNotFoundError)


class TestQuery:
    """Tests for the query command."""

    def test_query(self, runner, schema_module):
        result = runner.invoke(
            main,
            ["query", "-m", schema_module, "-r", "Root", "-d", "query { echo(text: $text) }", "-V", '{"text": "hi"}'],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"echo": "hi"}

    def test_mutation(self, runner, schema_module):
        result = runner.invoke(
            main,
            ["query", "-m", schema_module, "-r", "Root", "-d", "mutation { add(amount: $n) }", "-V", '{"n": 3}'],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"add": None}

    def test_query_error(self, runner, schema_module):
        result = runner.invoke(main, ["query", "-m", schema_module, "-r", "Root", "-d", "query { nope }"])
        assert result.exit_code == 1
        assert "GraphQL errors:" in result.output

    def test_invalid_variables(self, runner, schema_module):
        result = runner.invoke(
            main, ["query", "-m", schema_module, "-r", "Root", "-d", "query { echo(text: $t) }", "-V", "{bad"]
        )
        assert result.exit_code == 2
        assert "not valid JSON" in result.output
