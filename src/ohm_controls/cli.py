"""CLI entry point for ohm-controls."""

import json
import logging
from pathlib import Path

import click

from ohm_controls.app.repository import PageRequest, Sort
from ohm_controls.app.service import build_service
from ohm_controls.config import Settings
from ohm_controls.controls import ControlSetBuilder, OhmResponse, resolve
from ohm_controls.errors import ControlResolutionError, EntityNotFound, InvalidSpecDocument
from ohm_controls.spec.index import SpecIndex
from ohm_controls.spec.loader import load_document, parse_openapi

RESOURCES = ["entry", "customers", "customer", "orders", "order", "customer-orders"]


def _parse_bindings(values: tuple[str, ...]) -> dict[str, str]:
    """Parse `name=value` pairs given with -p."""
    bindings = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint="-p")
        bindings[name] = value
    return bindings


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.option("--log-level", default=Settings().log_level, envvar="OHM_LOG_LEVEL",
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level.")
def main(log_level: str):
    """Hypermedia controls for CRUD responses, derived from an OpenAPI document."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def inspect(doc_path: Path):
    """List the operations declared in an OpenAPI document."""
    try:
        document = parse_openapi(doc_path)
    except InvalidSpecDocument as e:
        raise click.ClickException(str(e))
    operations = SpecIndex(document).operations()
    for path, method, operation in operations:
        click.echo(f"{method.value:<7} {path}  {operation.summary}")
    click.echo(f"Found {len(operations)} operations.")


@main.command("resolve")
@click.argument("path_template")
@click.option("-m", "--method", default="GET", type=click.Choice([
    "GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE"], case_sensitive=False),
    help="HTTP method of the operation.")
@click.option("-p", "--param", "params", multiple=True, help="Bound parameter as name=value (repeatable).")
@click.option("--summary", default=None, help="Summary override.")
@click.option("--spec", "spec_path", default=None, envvar="OHM_SPEC_PATH",
              type=click.Path(exists=True, path_type=Path), help="OpenAPI document (defaults to the bundled one).")
def resolve_cmd(path_template: str, method: str, params: tuple[str, ...], summary: str | None, spec_path: Path | None):
    """Resolve one operation into a control and print it."""
    bindings = _parse_bindings(params)
    try:
        document = load_document(spec_path)
        control = resolve(document, path_template, method, bindings, summary=summary)
    except (ControlResolutionError, InvalidSpecDocument) as e:
        raise click.ClickException(str(e))
    _echo_json(ControlSetBuilder().insert(control).materialize().to_openapi())


@main.command()
@click.argument("resource", type=click.Choice(RESOURCES))
@click.option("--id", "entity_id", default=1, type=int, help="Entity id for single-entity resources.")
@click.option("--page", default=0, type=click.IntRange(min=0), help="Page index (0-based).")
@click.option("--size", default=None, type=click.IntRange(min=1), envvar="OHM_PAGE_SIZE", help="Page size.")
@click.option("--sort", "sorts", multiple=True, help="Sort as field,direction (repeatable).")
@click.option("--spec", "spec_path", default=None, envvar="OHM_SPEC_PATH",
              type=click.Path(exists=True, path_type=Path), help="OpenAPI document (defaults to the bundled one).")
def demo(resource: str, entity_id: int, page: int, size: int | None, sorts: tuple[str, ...], spec_path: Path | None):
    """Run a demo resource handler on sample data and print the OHM response."""
    settings = Settings.from_env()
    if spec_path is not None:
        settings = settings.model_copy(update={"spec_path": spec_path})
    try:
        service = build_service(load_document(settings.spec_path), settings)
        request = PageRequest(page=page, size=size or settings.default_page_size, sort=Sort.parse(sorts))
        response = _dispatch(service, resource, entity_id, request)
    except (EntityNotFound, ValueError) as e:
        raise click.ClickException(str(e))
    _echo_json(response.to_dict())


def _dispatch(service, resource: str, entity_id: int, request: PageRequest) -> OhmResponse:
    if resource == "entry":
        return service.entry.get_entities()
    elif resource == "customers":
        return service.customers.get_all_customers()
    elif resource == "customer":
        return service.customers.get_customer(entity_id)
    elif resource == "orders":
        return service.orders.get_all_orders(request)
    elif resource == "order":
        return service.orders.get_order(entity_id)
    else:
        return service.orders.get_customer_orders(entity_id, request)
