from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import typer

from addressmap.configs.config import settings
from addressmap.configs.logging_init import initialize_loggers, logger

app = typer.Typer()


@app.callback()
def verbose_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging", is_eager=True
    ),
    verbose_level=typer.Option(
        "INFO",
        "--verbose-level",
        "-vl",
        help="Set verbose logging level",
        is_eager=True,
    ),
):
    """Set up logging for all commands"""
    initialize_loggers(verbose=verbose, verbose_level=verbose_level)


@app.command("version")
def version_cmd():
    """Show version information"""
    try:
        typer.echo(f"addressmap version: {version('addressmap')}")
    except PackageNotFoundError:
        typer.echo("addressmap version: unknown (not installed)")


@app.command("serve")
def serve(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Parquet file"),
    dimension: str = typer.Option(..., "--dimension", "-d", help="Address text column"),
    measure: str = typer.Option(..., "--measure", "-m", help="Numeric value column"),
    title: str = typer.Option("", "--title", help="Map title"),
    host: str = typer.Option(None, "--host", help="Override ADDRESSMAP_DASH_HOST"),
    port: int = typer.Option(None, "--port", help="Override ADDRESSMAP_DASH_PORT"),
):
    """Serve an address map for a data file"""
    from addressmap.dash.app import create_app
    from addressmap.dash.data_source import load_data_page
    from addressmap.models.components import AddressMapComponent

    component = AddressMapComponent(
        dimension=dimension,
        measure=measure,
        title=title,
        geometry_url=settings.map.geometry_url,
        binding_path=settings.map.binding_path,
    )
    try:
        page = load_data_page(data, component.dimension, component.measure)
    except ValueError as e:
        logger.error(f"Cannot load {data}: {e}")
        raise typer.Exit(code=1)

    dash_app = create_app(component, page)
    dash_app.run(
        host=host or settings.dash.host,
        port=port or settings.dash.port,
        debug=settings.dash.debug,
    )


def main():
    app()


if __name__ == "__main__":
    main()
