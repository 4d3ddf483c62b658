import json
import logging

import click

from . import __version__
from .pipeline import CodeGeneratorConfig, OpenApiToCodeError, OutputMode, PipelineGenerator
from .pipeline.analyzer import collect_schemas
from .pipeline.document import load_document, parse_document, schema_kind_name

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def load_config(path: str | None) -> CodeGeneratorConfig:
    if path is None:
        return CodeGeneratorConfig()
    with open(path) as f:
        return CodeGeneratorConfig.from_dict(json.load(f))


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase log output (-v info, -vv debug)")
@click.version_option(__version__, prog_name="openapi_to_code")
def openapi_to_code(verbose):
    """Generate Rust types from the schemas of an OpenAPI 3 document."""
    logging.basicConfig(
        level=LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )


@openapi_to_code.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--strict", is_flag=True, default=False, help="Fail when any diagnostic is reported")
@click.option("--format/--no-format", "format_", default=None, help="Run rustfmt on the output (overrides config)")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def generate(config, strict, format_, force, path, output):
    """Write the Rust declarations for PATH to OUTPUT."""
    config = load_config(config)

    # CLI flags override the config file
    if strict:
        config.strict = True
    if format_ is not None:
        config.formatter.enabled = format_
    if force:
        config.output.mode = OutputMode.FORCE

    try:
        codegen = PipelineGenerator(load_document(path), config)
        codegen.write(output)
    except (OpenApiToCodeError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e


@openapi_to_code.command()
@click.option("--full", is_flag=True, default=False, help="Also print the kind of each schema")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
def schemas(full, path):
    """List the schemas discovered in PATH."""
    try:
        registry = collect_schemas(parse_document(load_document(path)))
    except OpenApiToCodeError as e:
        raise click.ClickException(str(e)) from e

    for record in registry.records():
        if full:
            click.echo(f"{record.id}\t{schema_kind_name(record.data)}")
        else:
            click.echo(str(record.id))
