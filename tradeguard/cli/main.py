"""Main CLI entry point for TradeGuard.

Subcommands are imported lazily. Each loads the journal snapshot, passes it
to the engine and renders the result with rich.
"""

import importlib
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that imports command modules on first use.

    Subcommands are declared as ``"module.path:attribute"`` so a command's
    name does not have to match the function implementing it.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to ``module:attribute`` specs.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.commands and cmd_name in self._lazy_subcommands:
            self.add_command(self._resolve(cmd_name), cmd_name)
        return self.commands.get(cmd_name)

    def _resolve(self, cmd_name: str) -> click.Command:
        module_path, _, attr_name = self._lazy_subcommands[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_path), attr_name or cmd_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(f"'{cmd_name}' is not a command in {module_path}")
        return command


LAZY_SUBCOMMANDS = {
    # Risk
    "size": "tradeguard.cli.risk:size",
    "drawdown": "tradeguard.cli.risk:drawdown",
    "throttle": "tradeguard.cli.risk:throttle",
    # Readiness
    "gate": "tradeguard.cli.readiness:gate",
    "tilt": "tradeguard.cli.readiness:tilt",
    # Discipline
    "be": "tradeguard.cli.discipline:be",
    "score": "tradeguard.cli.discipline:score",
    # Challenge
    "project": "tradeguard.cli.challenge:project",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradeguard")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show engine debug logs.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeGuard - discipline and risk protocol for a futures trading journal.

    Reads a journal snapshot (accounts, trades, daily preps) and reports
    position sizing, drawdown, readiness and discipline scores.

    \b
    Quick Start:
      tradeguard size              # Position size per account
      tradeguard gate --hrv 45     # Morning readiness verdict
      tradeguard tilt              # Intraday tilt risk
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
