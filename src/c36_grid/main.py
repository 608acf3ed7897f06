"""CLI startup entrypoint for the C-36 grid generator."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import asdict
from pathlib import Path

import typer
from rich import print
from rich.logging import RichHandler
from rich.table import Table

from c36_grid.cells import CELL_BANDS, band_share, cell_roll, get_cell_type, get_shop_variant
from c36_grid.coin_dna import generate_coin_from_profile
from c36_grid.config import settings
from c36_grid.factory import generate_artifact
from c36_grid.models import CellType, DesignProfile, ShopVariant
from c36_grid.palette import resolve_palette
from c36_grid.profiles import ProfileError, get_profile, load_profile, profile_to_dict
from c36_grid.scan_runtime import InMemoryReportStore, JsonlReportStore, ScanRuntime
from c36_grid.scoring import calculate_coin_score, calculate_coin_value, format_year
from c36_grid.session import ExcavationSession
from c36_grid.shop import catalog_for_variant
from c36_grid.telemetry import LoggingTelemetry, NullTelemetry

app = typer.Typer(help="C-36 grid procedural content generator")


@app.callback()
def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _resolve_profile(profile_name: str | None, profile_file: str | None) -> DesignProfile:
    if profile_file:
        try:
            return load_profile(profile_file)
        except (OSError, ProfileError) as exc:
            raise typer.BadParameter(str(exc), param_hint="--profile-file") from exc
    try:
        return get_profile(profile_name or settings.default_profile)
    except KeyError as exc:
        raise typer.BadParameter(str(exc.args[0]), param_hint="--profile") from exc


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "default_profile": settings.default_profile,
            "report_log_path": settings.report_log_path,
            "telemetry_enabled": settings.telemetry_enabled,
            "cell_bands": [f"{band.low}-{band.high}: {band.category.value}" for band in CELL_BANDS],
        }
    )


@app.command()
def cell(
    x: int = typer.Option(..., help="Cell X"),
    y: int = typer.Option(..., help="Cell Y"),
) -> None:
    """Classify a single cell."""
    cell_type = get_cell_type(x, y)
    payload: dict = {"x": x, "y": y, "roll": cell_roll(x, y), "cell_type": cell_type.value}
    if cell_type == CellType.SHOP:
        payload["shop_variant"] = get_shop_variant(x, y).value
    print(payload)


@app.command()
def survey(
    x: int = typer.Option(0, help="Top-left cell X"),
    y: int = typer.Option(0, help="Top-left cell Y"),
    width: int = typer.Option(200, min=1, help="Cells along X"),
    height: int = typer.Option(200, min=1, help="Cells along Y"),
) -> None:
    """Count cell categories over a rectangle and compare with the configured bands."""
    counts = Counter(get_cell_type(cx, cy) for cx in range(x, x + width) for cy in range(y, y + height))
    total = width * height

    table = Table(title=f"Survey of {total:,} cells")
    table.add_column("Category")
    table.add_column("Count", justify="right")
    table.add_column("Observed", justify="right")
    table.add_column("Expected", justify="right")
    for category in CellType:
        table.add_row(
            category.value,
            f"{counts[category]:,}",
            f"{counts[category] / total:.2%}",
            f"{band_share(category):.0%}",
        )
    print(table)


@app.command()
def coin(
    x: int = typer.Option(..., help="Cell X"),
    y: int = typer.Option(..., help="Cell Y"),
    profile: str = typer.Option(None, help="Built-in profile name (ancient/circulation)"),
    profile_file: str = typer.Option(None, help="Path to a design profile JSON export"),
) -> None:
    """Generate coin DNA for a cell without the artifact envelope."""
    data = generate_coin_from_profile(x, y, _resolve_profile(profile, profile_file))
    print(
        {
            "coin": asdict(data),
            "year": format_year(data.year),
            "palette": asdict(resolve_palette(data)),
            "rarity_score": round(calculate_coin_score(data), 3),
            "monetary_value": calculate_coin_value(data),
        }
    )


@app.command()
def artifact(
    x: int = typer.Option(..., help="Cell X"),
    y: int = typer.Option(..., help="Cell Y"),
) -> None:
    """Excavate the artifact the factory places at a cell."""
    cell_type = get_cell_type(x, y)
    if cell_type != CellType.COIN:
        print({"artifact": None, "cell_type": cell_type.value})
        raise typer.Exit(code=1)
    print({"artifact": asdict(generate_artifact(x, y))})


@app.command()
def shop(variant: ShopVariant = typer.Argument(..., help="Shop variant")) -> None:
    """List the stock of a shop variant."""
    table = Table(title=f"{variant.value.replace('_', ' ').title()} stock")
    table.add_column("SKU")
    table.add_column("Item")
    table.add_column("Cost", justify="right")
    for entry in catalog_for_variant(variant):
        table.add_row(entry.sku, entry.name, f"${entry.cost:,}")
    print(table)


@app.command("profile")
def show_profile(
    name: str = typer.Argument(None, help="Built-in profile name"),
    profile_file: str = typer.Option(None, help="Path to a design profile JSON export"),
) -> None:
    """Print a profile in the design tool's JSON shape."""
    print(profile_to_dict(_resolve_profile(name, profile_file)))


def _parse_cells(path: list[str]) -> list[tuple[int, int]]:
    cells: list[tuple[int, int]] = []
    for raw in path:
        try:
            cx, cy = (int(part) for part in raw.split(","))
        except ValueError as exc:
            raise typer.BadParameter(f"Expected x,y but got {raw!r}") from exc
        cells.append((cx, cy))
    return cells


@app.command()
def excavate(path: list[str] = typer.Argument(..., help="Cells as x,y pairs, e.g. 0,0 0,1 1,1")) -> None:
    """Excavate a sequence of cells and print the resulting player state."""
    telemetry = LoggingTelemetry() if settings.telemetry_enabled else NullTelemetry()
    session = ExcavationSession(telemetry=telemetry)
    for cx, cy in _parse_cells(path):
        session.enter_cell(cx, cy)
        result = session.excavate(cx, cy)
        print(
            {
                "x": cx,
                "y": cy,
                "cell_type": result.cell_type.value,
                "artifact": result.artifact.id if result.artifact else None,
                "value": result.artifact.monetary_value if result.artifact else 0,
                "healed": result.healed,
            }
        )

    state = session.state
    print({"hp": state.hp, "xp": state.xp, "inventory_value": sum(item.monetary_value for item in state.inventory)})


@app.command()
def walk(
    path: list[str] = typer.Argument(..., help="Cells as x,y pairs, e.g. 0,0 0,1 1,1"),
    report_log: str = typer.Option(None, help="JSONL file to append cell reports to"),
) -> None:
    """Feed a walked path through the async scan runtime."""
    cells = _parse_cells(path)

    target = report_log or settings.report_log_path
    store = JsonlReportStore(Path(target)) if target else InMemoryReportStore(max_reports=settings.scan_queue_size)

    async def _run() -> list:
        runtime = ScanRuntime(report_store=store, max_queue_size=settings.scan_queue_size)
        await runtime.start()
        reports = []
        # Batches never exceed the queue, so every report is still retained when collected.
        batch_size = runtime.capacity or max(1, len(cells))
        for start_index in range(0, len(cells), batch_size):
            batch = cells[start_index : start_index + batch_size]
            report_ids = [runtime.submit(cx, cy) for cx, cy in batch]
            await asyncio.wait_for(runtime.drain(), timeout=5)
            reports.extend(runtime.get_report(report_id) for report_id in report_ids)
        await runtime.stop()
        return reports

    for report in asyncio.run(_run()):
        print(
            {
                "x": report.x,
                "y": report.y,
                "cell_type": report.cell_type.value if report.cell_type else None,
                "shop_variant": report.shop_variant.value if report.shop_variant else None,
            }
        )


if __name__ == "__main__":
    app()
