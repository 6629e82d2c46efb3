"""flag-avatar CLI.

Command-line interface for composing the flag marker onto an avatar,
headlessly or in the desktop editor.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from flagavatar import __version__
from flagavatar.config import settings
from flagavatar.editor.placement import EDIT_SURFACE_SIZE
from flagavatar.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="flag-avatar",
    help="flag-avatar: put a pride flag on your avatar",
    add_completion=False,
)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"flag-avatar {__version__}")


@app.command()
def compose(  # noqa: PLR0913
    image_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Image to put the flag on",
        ),
    ],
    drag: Annotated[
        list[str] | None,
        typer.Option(
            "--drag",
            "-d",
            help="Drag gesture FX,FY:TX,TY in display pixels (repeatable)",
        ),
    ] = None,
    display_size: Annotated[
        str,
        typer.Option(
            "--display-size",
            help="On-screen size W,H the drag coordinates refer to",
        ),
    ] = f"{EDIT_SURFACE_SIZE},{EDIT_SURFACE_SIZE}",
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for the exported PNG"),
    ] = None,
    preview: Annotated[
        Path | None,
        typer.Option("--preview", "-p", help="Also save the circular preview here"),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"
        ),
    ] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Compose the flag onto IMAGE and export it at full resolution."""
    from flagavatar.cli.runners import (  # noqa: PLC0415
        parse_drag,
        parse_size,
        run_compose,
    )

    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        gestures = [parse_drag(value) for value in drag or []]
        display = parse_size(display_size)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from None

    logger.info("Starting compose", image=str(image_path), drags=len(gestures))

    try:
        result = run_compose(
            image_path,
            drags=gestures,
            display_size=display,
            output_dir=output_dir or Path(settings.EXPORT_DIR),
            preview_path=preview,
        )
    except Exception as e:
        logger.exception("Compose failed")
        if json_output:
            typer.echo(json.dumps({"error": str(e)}))
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "success": result.success,
                    "output": str(result.output_path) if result.output_path else None,
                    "preview": str(result.preview_path) if result.preview_path else None,
                    "size": result.size.to_tuple() if result.size else None,
                    "scale": result.scale,
                    "placement": result.placement.to_tuple()
                    if result.placement
                    else None,
                    "notices": [n.message for n in result.notices],
                },
                indent=2,
            )
        )
    else:
        for notice in result.notices:
            typer.echo(notice.message, err=True)
        if result.success and result.size is not None:
            typer.echo(
                f"Saved {result.output_path} "
                f"({result.size.width}x{result.size.height})"
            )
        if result.preview_path is not None:
            typer.echo(f"Preview: {result.preview_path}")

    raise typer.Exit(0 if result.success else 1)


@app.command()
def edit(
    image_path: Annotated[
        Path | None,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Image to open right away",
        ),
    ] = None,
    verbose: Annotated[
        int, typer.Option("--verbose", "-v", count=True, help="Increase verbosity")
    ] = 0,
) -> None:
    """Open the desktop editor (requires the 'gui' extra)."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        from flagavatar.app.window import run_editor  # noqa: PLC0415
    except ImportError as e:
        logger.warning("Desktop editor unavailable", error=str(e))
        typer.echo(
            "Error: the desktop editor needs the 'gui' extra "
            "(pip install 'flag-avatar[gui]').",
            err=True,
        )
        raise typer.Exit(1) from None

    run_editor(image_path)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """flag-avatar: put a pride flag on your avatar."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:  # verbose >= 2
        level = "DEBUG"

    configure_logging(level=level)


if __name__ == "__main__":  # pragma: no cover
    app()
