"""CLI commands for halkit."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from halkit.collection import (
    extract_collection,
    infer_page_title,
    is_collection,
    organize_fields,
)
from halkit.config import HalkitConfig, load_config
from halkit.errors import HalkitError
from halkit.log import setup_logging
from halkit.models import Resource
from halkit.navigator import expand_template
from halkit.runtime import Runtime
from halkit.templates import (
    TemplateCategory,
    TemplateExecutionContext,
    build_template_data,
    categorize_template,
    get_confirmation_config,
)

logger = logging.getLogger(__name__)


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, Any]:
    """Parse ``NAME=VALUE`` arguments; JSON literals are decoded, anything else stays a string."""
    params: dict[str, Any] = {}
    for assignment in assignments:
        name, sep, raw = assignment.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got '{assignment}'")
        try:
            params[name] = json.loads(raw)
        except ValueError:
            params[name] = raw
    return params


def _display(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, (dict, list)):
        return escape(json.dumps(value, default=str))
    if isinstance(value, bool):
        return "true" if value else "false"
    return escape(str(value))


def _build_runtime(ctx: click.Context) -> Runtime:
    config: HalkitConfig = ctx.obj["config"]
    return Runtime.from_config(
        config,
        on_auth_error=lambda: logger.info("Server requested authentication"),
        transport=ctx.obj.get("transport"),
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.option("--base-url", "-u", help="Override the API base URL")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None, base_url: str | None) -> None:
    """halkit - HAL and HAL-FORMS client."""
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except HalkitError as e:
        raise click.ClickException(str(e)) from e
    if base_url:
        config_obj = config_obj.model_copy(update={"base_url": base_url.rstrip("/")})

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    setup_logging(verbose, config_obj.environment)


@cli.command()
@click.argument("path")
@click.option("--embedded-key", "-k", help="Embedded key holding the collection items")
@click.option("--all-columns", is_flag=True, help="Include hidden columns")
@click.option("--json", "as_json", is_flag=True, help="Print the raw HAL document")
@click.pass_context
def fetch(ctx: click.Context, path: str, embedded_key: str | None, all_columns: bool, as_json: bool) -> None:
    """Fetch a resource and describe its fields, links and templates."""

    async def _fetch() -> Any:
        async with _build_runtime(ctx) as runtime:
            return await runtime.client.fetch(path), runtime

    try:
        outcome, runtime = asyncio.run(_fetch())
    except HalkitError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not outcome.is_ok:
        _report_failure(outcome)
        sys.exit(1)

    resource: Resource = outcome.value
    if as_json:
        click.echo(json.dumps(resource.to_hal(), indent=2, default=str))
        return

    console = Console()
    organized = organize_fields(resource, runtime.inference_options)
    console.print(f"[bold]{escape(infer_page_title(resource, organized.overview))}[/bold]")

    fields_table = Table(title="Fields", box=box.ROUNDED, header_style="bold cyan")
    fields_table.add_column("Field")
    fields_table.add_column("Type")
    fields_table.add_column("Value")
    for inferred in organized.overview + organized.details:
        fields_table.add_row(inferred.label, inferred.type.value, _display(resource.get(inferred.key)))
    console.print(fields_table)

    links = runtime.navigator.get_available_relations(resource)
    if links:
        links_table = Table(title="Links", box=box.ROUNDED, header_style="bold cyan")
        links_table.add_column("Relation")
        links_table.add_column("Href")
        for rel in links:
            link = runtime.navigator.find_link(resource, rel)
            suffix = " (templated)" if link and link.templated else ""
            links_table.add_row(rel, escape((link.href if link else "") + suffix))
        console.print(links_table)

    if resource.templates:
        templates_table = Table(title="Templates", box=box.ROUNDED, header_style="bold cyan")
        templates_table.add_column("Key")
        templates_table.add_column("Method")
        templates_table.add_column("Category")
        templates_table.add_column("Target")
        for key, template in resource.templates.items():
            category = categorize_template(template, key)
            templates_table.add_row(key, template.method.upper(), category.value, escape(template.target))
        console.print(templates_table)

    if is_collection(resource):
        collection = extract_collection(
            resource,
            runtime.inference_options,
            embedded_key=embedded_key,
            include_hidden=all_columns,
        )
        items_table = Table(title="Items", box=box.ROUNDED, header_style="bold cyan")
        for column in collection.columns:
            items_table.add_column(column.label)
        for item in collection.items:
            items_table.add_row(*(_display(item.get(column.key)) for column in collection.columns))
        console.print(items_table)
        if collection.page:
            total = collection.total if collection.total is not None else "?"
            console.print(f"Page {collection.page.number} (size {collection.page.size}, total {total})")


@cli.command()
@click.argument("template")
@click.argument("assignments", nargs=-1)
def expand(template: str, assignments: tuple[str, ...]) -> None:
    """Expand a URI template with NAME=VALUE parameters."""
    click.echo(expand_template(template, parse_assignments(assignments)))


@cli.command()
@click.argument("path")
@click.argument("template_key")
@click.argument("assignments", nargs=-1)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt for actions")
@click.pass_context
def submit(ctx: click.Context, path: str, template_key: str, assignments: tuple[str, ...], yes: bool) -> None:
    """Fetch a resource and submit one of its templates."""
    form_data = parse_assignments(assignments)

    async def _submit() -> Any:
        async with _build_runtime(ctx) as runtime:
            fetched = await runtime.client.fetch(path)
            if not fetched.is_ok:
                return fetched
            resource: Resource = fetched.value
            template = resource.templates.get(template_key)
            if template is None:
                raise click.ClickException(
                    f"Template '{template_key}' not found. Available: {', '.join(resource.templates) or 'none'}"
                )

            context = TemplateExecutionContext(template=template, form_data=form_data, resource=resource)
            data = build_template_data(context)

            if categorize_template(template, template_key) is TemplateCategory.ACTION and not yes:
                confirmation = get_confirmation_config(template, context)
                click.confirm(f"{confirmation.title}: {confirmation.message}", abort=True)

            return await runtime.client.submit_template(template, data)

    try:
        outcome = asyncio.run(_submit())
    except HalkitError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not outcome.is_ok:
        _report_failure(outcome)
        sys.exit(1)

    click.echo(json.dumps(outcome.value.to_hal(), indent=2, default=str))


def _report_failure(outcome: Any) -> None:
    if outcome.kind == "invalid":
        click.echo("Validation failed:", err=True)
        for error in outcome.errors:
            click.echo(f"  - {error.field}: {error.message}", err=True)
    elif outcome.kind == "failed":
        click.echo(f"Error: {outcome.error}", err=True)
    elif outcome.kind == "redirecting":
        click.echo("Error: authentication required", err=True)


def main() -> None:
    """Main entry point for the halkit CLI."""
    cli()


__all__ = ["cli", "main", "parse_assignments"]
