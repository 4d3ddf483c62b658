#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from openapi_to_code.cli_utils import reconstruct_command_line
from openapi_to_code.openapi_to_code import generate


@click.group()
def cli():
    pass


@cli.command()
@click.option("--config", "-c", default=None)
@click.option("--strict", is_flag=True, default=False)
@click.argument("path")
def echo(config, strict, path):
    click.echo(reconstruct_command_line())


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context the program name is returned"""
        assert reconstruct_command_line(generate) == "openapi_to_code"

    def test_reconstruct_command_line_inside_subcommand(self):
        result = CliRunner().invoke(cli, ["echo", "api.yaml", "--strict", "-c", "config.json"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "openapi_to_code echo api.yaml --config config.json --strict"

    def test_defaults_are_skipped(self):
        result = CliRunner().invoke(cli, ["echo", "api.yaml"])
        assert result.output.strip() == "openapi_to_code echo api.yaml"


if __name__ == "__main__":
    pytest.main([__file__])
