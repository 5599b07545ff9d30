"""CLI entry point for debug-api."""

from pathlib import Path

import click

from debug_api.catalog import EndpointCatalog, default_catalog, load_catalog
from debug_api.config import DEFAULT_PORTS, default_scheme
from debug_api.errors import DebugApiError
from debug_api.schema.base import NodeKind
from debug_api.transport import prepare


def _load(catalog_paths: tuple[Path, ...]) -> EndpointCatalog:
    """Load the catalog from explicit paths or the configured default."""
    try:
        if catalog_paths:
            return load_catalog(catalog_paths)
        return default_catalog()
    except DebugApiError as e:
        raise click.ClickException(str(e)) from e


def _parse_values(pairs: tuple[str, ...]) -> dict[str, str]:
    values = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {pair!r}", param_hint="-p/--param")
        values[name] = value
    return values


catalog_option = click.option(
    "--catalog", "catalog_paths", multiple=True, type=click.Path(exists=True, path_type=Path),
    help="Catalog YAML file or directory (repeatable). Defaults to $DEBUG_API_CATALOG or the bundled catalog.",
)


@click.group()
def main():
    """Debug API: build validated requests for cluster component debug endpoints."""
    pass


@main.command("list")
@catalog_option
@click.option("--component", default=None, type=click.Choice([k.value for k in NodeKind]), help="Only list endpoints of this component.")
def list_endpoints(catalog_paths: tuple[Path, ...], component: str | None):
    """List the endpoints in the catalog."""
    catalog = _load(catalog_paths)
    definitions = catalog.for_component(NodeKind(component)) if component else list(catalog)
    for d in definitions:
        click.echo(f"{d.id:<28} {d.component.value:<8} {d.method.value:<6} {d.path}")
    click.echo(f"{len(definitions)} endpoints.")


@main.command()
@catalog_option
@click.argument("endpoint_id")
def show(catalog_paths: tuple[Path, ...], endpoint_id: str):
    """Show the parameters an endpoint accepts."""
    catalog = _load(catalog_paths)
    try:
        d = catalog.get(endpoint_id)
    except DebugApiError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"{d.method.value} {d.path} ({d.component.value})")
    if d.description:
        click.echo(d.description)
    for kind, params in (("path", d.path_params), ("query", d.query_params)):
        for p in params:
            flag = "required" if p.required or kind == "path" else "optional"
            click.echo(f"  {kind:<6} {p.name:<20} {p.model.type:<10} {flag}")


@main.command()
@catalog_option
@click.argument("endpoint_id")
@click.option("--host", required=True, help="Host of the target component.")
@click.option("--port", default=None, type=click.IntRange(1, 65535), help="Port of the target component. Defaults to the component's status port.")
@click.option("-p", "--param", "params", multiple=True, help="Parameter value as name=value (repeatable).")
@click.option("--scheme", default=None, type=click.Choice(["http", "https"]), help="URL scheme. Defaults to $DEBUG_API_SCHEME or http.")
def build(catalog_paths: tuple[Path, ...], endpoint_id: str, host: str, port: int | None, params: tuple[str, ...], scheme: str | None):
    """Build the request for an endpoint and print its method and URL."""
    catalog = _load(catalog_paths)
    values = _parse_values(params)
    try:
        definition = catalog.get(endpoint_id)
        request = catalog.build(endpoint_id, host, port or DEFAULT_PORTS[definition.component], values)
    except DebugApiError as e:
        raise click.ClickException(str(e)) from e

    prepared = prepare(request, scheme or default_scheme())
    click.echo(f"{prepared.method} {prepared.url}")
