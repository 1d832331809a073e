"""Thin CLI wrapper for nodeflash.

This module provides the command-line interface using Typer.
All business logic is delegated to the resolver and runner modules.
"""

import json
import logging
from typing import Annotated, Any

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer.core import TyperGroup

from nodeflash import __version__
from nodeflash.config import Settings, get_settings, print_settings_json
from nodeflash.types import FlashRequest, ResolvedEnvironment, WirelessConfig

logger = logging.getLogger(__name__)


def _ignore_unknown_command() -> None:
    ctx = click.get_current_context()
    logger.debug("Ignoring unknown command %r", ctx.info_name)


class LenientGroup(TyperGroup):
    """Command group that treats unknown subcommands as a silent no-op."""

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        cmd_name = args[0]
        if self.get_command(ctx, cmd_name) is None:
            ignored = click.Command(cmd_name, callback=_ignore_unknown_command)
            return cmd_name, ignored, []
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="nodeflash",
    help="Race gate node flasher - derive node configuration and flash firmware",
    cls=LenientGroup,
    no_args_is_help=False,
)
console = Console()

# Positionals are taken verbatim: a leading "-" does not make an option, and
# surplus arguments are ignored.
POSITIONAL_CONTEXT = {"ignore_unknown_options": True, "allow_extra_args": True}


def _print_plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from None


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nodeflash version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Race gate node flasher - derive node configuration and flash firmware."""
    if ctx.invoked_subcommand is None or (
        ctx.command.get_command(ctx, ctx.invoked_subcommand) is None
    ):
        return
    settings = _load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve(request: FlashRequest, settings: Settings) -> ResolvedEnvironment:
    from nodeflash.resolver import resolve_environment

    return resolve_environment(request, wifi_override=settings.wifi_config)


def _print_resolved(resolved: ResolvedEnvironment) -> None:
    for name, value in resolved.as_env().items():
        _print_plain(f"{name}={value}")


@app.command(context_settings=POSITIONAL_CONTEXT)
def flash(
    platform: Annotated[
        str, typer.Argument(help="Platform feature set (e.g., esp32)")
    ] = "",
    serial_port: Annotated[
        str, typer.Argument(help="Serial device (e.g., /dev/ttyUSB0)")
    ] = "",
    node_address: Annotated[
        str, typer.Argument(help="Node address; 0 makes the node the access point")
    ] = "",
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be run without flashing"),
    ] = False,
) -> None:
    """Build, flash and monitor the firmware for one node.

    NODE_ADDRESS and WIFI_CONFIG are exported to the flashing tool. Set
    WIFI_CONFIG beforehand to use a pre-built 'ap_enabled:ssid:password'
    triple instead of the derived one.

    The exit status is the flashing tool's exit status.
    """
    from nodeflash.runner import (
        FlashExecutionError,
        compose_flash_command,
        exit_status,
        run_flash,
    )

    settings = _load_settings()
    request = FlashRequest(
        platform=platform, serial_port=serial_port, node_address=node_address
    )
    resolved = _resolve(request, settings)
    _print_resolved(resolved)

    if dry_run:
        import shlex

        cmd = compose_flash_command(request, settings)
        _print_plain(f"Would run: {shlex.join(cmd)}")
        return

    try:
        result = run_flash(request, resolved, settings)
    except FlashExecutionError as e:
        console.print(f"[red]Flash failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=127) from None

    logger.info("%s exited with code %d", result.command, result.exit_code)
    raise typer.Exit(code=exit_status(result.exit_code))


@app.command(context_settings=POSITIONAL_CONTEXT)
def resolve(
    platform: Annotated[
        str, typer.Argument(help="Platform feature set (e.g., esp32)")
    ] = "",
    serial_port: Annotated[
        str, typer.Argument(help="Serial device (e.g., /dev/ttyUSB0)")
    ] = "",
    node_address: Annotated[
        str, typer.Argument(help="Node address; 0 makes the node the access point")
    ] = "",
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show the node configuration a flash would use, without flashing."""
    settings = _load_settings()
    request = FlashRequest(
        platform=platform, serial_port=serial_port, node_address=node_address
    )
    resolved = _resolve(request, settings)

    try:
        wireless: WirelessConfig | None = WirelessConfig.parse(resolved.wifi_config)
    except ValueError:
        wireless = None

    if json_output:
        output: dict[str, Any] = {
            "node_address": resolved.node_address,
            "wifi_config": resolved.wifi_config,
            "overridden": resolved.overridden,
            "ap_enabled": wireless.ap_enabled if wireless else None,
            "ssid": wireless.ssid if wireless else None,
        }
        _print_plain(json.dumps(output, indent=2))
        return

    _print_resolved(resolved)
    source = "override (WIFI_CONFIG)" if resolved.overridden else "derived"
    console.print(f"  Wireless source:     {source}")
    if wireless is None:
        console.print(
            "[yellow]  Wireless config is not an ap:ssid:password triple[/yellow]"
        )
    else:
        mode = "access point" if wireless.ap_enabled else "station"
        console.print(f"  Wireless mode:       {mode}")
        _print_plain(f"  SSID:                {wireless.ssid}")


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = _load_settings()
    if json_output:
        _print_plain(print_settings_json(settings))
    else:
        override_display = settings.wifi_config or "(not set, derived per node)"
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Flashing tool:[/bold]")
        _print_plain(f"  Command:             {settings.flash_tool}")
        console.print(f"  Speed (baud):        {settings.flash_speed}")
        _print_plain(f"  Partition table:     {settings.partition_table}")
        console.print()
        console.print("[bold]Wireless:[/bold]")
        _print_plain(f"  WIFI_CONFIG override: {override_display}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Log level:           {settings.log_level}")


if __name__ == "__main__":
    app()
