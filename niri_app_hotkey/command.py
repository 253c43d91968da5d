"""niri-app-hotkey - launch, show, hide, activate or toggle application windows in niri."""

import argparse
import asyncio
import sys
from logging import Logger
from typing import NoReturn

from .adapters.niri import NiriBackend
from .config_loader import ConfigLoader
from .ipc import niri_connection
from .logging_setup import get_logger, init_logger
from .models import ExitCode, HotkeyCommand, HotkeyError
from .planner import run_command
from .validate_cli import run_validate
from .version import VERSION

__all__ = ["create_parser", "main"]

VALIDATE = "validate"

COMMANDS_HELP = {
    HotkeyCommand.LAUNCH: "Launch the specified application.",
    HotkeyCommand.SHOW: "Show the specified application window(s), bringing them from the hidden workspace.",
    HotkeyCommand.HIDE: "Hide the specified application window(s) on the hidden workspace.",
    HotkeyCommand.ACTIVATE: "Focus the specified application window(s) which are not hidden.",
    HotkeyCommand.TOGGLE: "Launch, show, hide or activate the specified application, depending on its windows.",
}


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser exiting with USAGE_ERROR."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(ExitCode.USAGE_ERROR, f"{self.prog}: error: {message}\n")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = ArgumentParser(
        prog="niri-app-hotkey",
        description="Control application windows in niri from hotkeys.",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        default="",
        help="Path to configuration file. Defaults to `$XDG_CONFIG_HOME/niri/niri-app-hotkey.kdl`.",
    )
    parser.add_argument("--debug", action="store_true", help="Show debug messages.")
    parser.add_argument("--log-file", metavar="FILE", default=None, help="Also write log messages to FILE.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
    subparsers.add_parser(VALIDATE, help="Validate the configuration file.")
    for command, help_text in COMMANDS_HELP.items():
        sub = subparsers.add_parser(command.value, help=help_text)
        sub.add_argument("app_name", metavar="APP_NAME", help="Application name, as written in the configuration")
    return parser


async def run(args: argparse.Namespace, log: Logger) -> ExitCode:
    """Run the parsed command."""
    if args.command == VALIDATE:
        return await run_validate(args.config, log)

    config = await ConfigLoader(log).load(args.config)
    application = config.find_application(args.app_name)
    async with niri_connection(log) as connection:
        await run_command(HotkeyCommand(args.command), application, NiriBackend(connection), log)
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Run the command."""
    args = create_parser().parse_args(argv)
    init_logger(filename=args.log_file, force_debug=args.debug)
    log = get_logger()

    try:
        return asyncio.run(run(args, log))
    except HotkeyError as e:
        log.critical("%s", e)
        return e.exit_code
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
