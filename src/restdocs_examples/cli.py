"""CLI entry point for restdocs-examples."""

import json
import logging
from pathlib import Path

import click
import yaml

from restdocs_examples.config import EXTENSION_ENV, PATH_ENV, ReaderSettings
from restdocs_examples.errors import UnsupportedDocumentError
from restdocs_examples.openapi import apply_examples
from restdocs_examples.parser.base import Response
from restdocs_examples.plugin import RestDocsOperationBuilderPlugin
from restdocs_examples.reader import ExampleResponseReader


def _settings(paths: tuple[Path, ...], packages: tuple[str, ...], extension: str | None) -> ReaderSettings:
    """Environment settings overridden by command-line options."""
    settings = ReaderSettings.from_env()
    updates = {}
    if paths:
        updates["search_path"] = list(paths)
    if packages:
        updates["packages"] = list(packages)
    if extension:
        updates["extension"] = extension
    return settings.model_copy(update=updates)


def _create_reader(paths: tuple[Path, ...], packages: tuple[str, ...], extension: str | None) -> ExampleResponseReader:
    try:
        return _settings(paths, packages, extension).create_reader()
    except ModuleNotFoundError as e:
        raise click.ClickException(f"cannot search package: {e}")


def _response_to_dict(response: Response) -> dict:
    return {
        "code": response.code,
        "headers": [h.model_dump() for h in sorted(response.headers, key=lambda h: h.name)],
        "examples": [e.model_dump() for e in response.examples],
    }


def _load_document(doc_path: Path) -> dict:
    text = doc_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise click.ClickException(f"{doc_path} is not valid YAML or JSON: {e}")
    if not isinstance(doc, dict):
        raise click.ClickException(f"{doc_path} does not contain an API document")
    return doc


def _dump_document(doc: dict, output: Path) -> str:
    if output.suffix.lower() == ".json":
        return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)


path_option = click.option(
    "-p", "--path", "paths", multiple=True, type=click.Path(path_type=Path),
    help=f"Directory to search for captured responses (repeatable). Defaults to ${PATH_ENV} or '.'.",
)
package_option = click.option(
    "--package", "packages", multiple=True,
    help="Python package whose resources hold captured responses (repeatable).",
)
extension_option = click.option(
    "--extension", default=None,
    help=f"Extension of captured response files. Defaults to ${EXTENSION_ENV} or 'springfox'.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Add example responses captured by REST Docs to API documentation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("operation")
@path_option
@package_option
@extension_option
def read(operation: str, paths: tuple[Path, ...], packages: tuple[str, ...], extension: str | None):
    """Print the example responses captured for OPERATION as JSON."""
    reader = _create_reader(paths, packages, extension)
    responses = sorted(reader.read(operation), key=lambda r: r.code)
    click.echo(json.dumps([_response_to_dict(r) for r in responses], indent=2, ensure_ascii=False))


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the enriched document.")
@path_option
@package_option
@extension_option
def merge(doc_path: Path, output: Path, paths: tuple[Path, ...], packages: tuple[str, ...], extension: str | None):
    """Add captured example responses to the operations of an OpenAPI document."""
    click.echo(f"Reading {doc_path}...")
    doc = _load_document(doc_path)

    plugin = RestDocsOperationBuilderPlugin(_create_reader(paths, packages, extension))
    try:
        enriched = apply_examples(doc, [plugin])
    except UnsupportedDocumentError as e:
        raise click.ClickException(str(e))

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump_document(doc, output), encoding="utf-8")
    click.echo(f"Added examples to {enriched} operations.")
    click.echo(f"Document saved to {output}")
