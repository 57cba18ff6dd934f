"""CSV export and import commands."""

from pathlib import Path

import typer

from .shared import logger, open_service, print_result


def export(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Destination CSV file"),
) -> None:
    """Write all items to a CSV file."""
    with open_service(ctx) as service:
        result = service.export_to(path)
    print_result(result)
    if not result.ok:
        raise typer.Exit(1)


def import_items(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Source CSV file"),
    replace: bool = typer.Option(False, "--replace", help="Clear the inventory before importing"),
) -> None:
    """Read items from a CSV file, keeping their IDs."""
    log = logger.bind(command="import", path=str(path), replace=replace)
    with open_service(ctx) as service:
        result = service.import_from(path, clear_existing=replace)
    print_result(result)
    log.info("import.complete", ok=result.ok)
    if not result.ok:
        raise typer.Exit(1)
