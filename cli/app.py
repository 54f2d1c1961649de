"""
smfread - Standard MIDI File inspector.

A CLI tool for decoding and analyzing Standard MIDI Files.
"""

import typer
from rich.console import Console

from smfreader import __version__
from cli.commands.info import info
from cli.commands.events import events
from cli.commands.tempo import tempo
from cli.commands.dump import dump
from cli.commands.validate import validate

console = Console()

# Main app
app = typer.Typer(
    name="smfread",
    help="Decode and analyze Standard MIDI Files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="events")(events)
app.command(name="tempo")(tempo)
app.command(name="dump")(dump)
app.command(name="validate")(validate)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smfread[/bold] version {__version__}")
    console.print("[dim]Standard MIDI File decoder[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    smfread - Decode and analyze Standard MIDI Files.

    [bold]Quick Start:[/bold]

        smfread info song.mid            # Header and track summary
        smfread events song.mid -t 1     # Events of track 1

    [bold]Analysis Commands:[/bold]

        smfread tempo song.mid           # Tempo map
        smfread dump song.mid -t 0       # Annotated hex dump
        smfread validate song.mid        # Decode and check every track

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
