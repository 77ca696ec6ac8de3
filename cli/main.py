# cli/main.py

"""
Home menu for the Homework Tracker CLI.

Loads the configuration and the stored data, then offers group entry for
groups 1-6 and the PIN-gated teacher dashboard.
"""

import argparse
import logging
import sys
from textwrap import dedent

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import dashboard_menu, entry_menu
from core.config import Config
from core.controller import Controller
from core.pin_gate import PinGate
from core.storage import JsonFileStore
from models.roster import GROUPS
from models.tracker import HomeworkTracker

logger = logging.getLogger(__name__)

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configures the root logger; records go to stderr and, optionally, a file."""
    root_logger = logging.getLogger()
    formatter = logging.Formatter(LOG_FORMAT)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def print_to_terminal(text: str) -> str:
    """Clipboard stand-in for terminals: shows the text framed for manual copying."""
    print(f"\n{formatters.format_banner_text('COPY BELOW')}")
    print(text)
    print(formatters.format_banner_text("END"))

    return "Notification text printed above; copy it from the terminal."


def build_controller(config: Config) -> Controller | None:
    """
    Opens the data directory and wires up the `Controller`.

    Returns:
        Controller: Ready to use, with the loaded `HomeworkTracker`.
        None: If the stored data could not be read; nothing is overwritten in that case.
    """
    store = JsonFileStore(config.data_dir)
    tracker_response = HomeworkTracker.load(store)

    if not tracker_response.success:
        helpers.display_response_failure(tracker_response)
        print(
            dedent(
                f"""\
                The data in {config.data_dir} could not be loaded.
                Fix or move the files before starting again; nothing has been changed."""
            )
        )
        return None

    return Controller(
        tracker_response.data["tracker"],
        PinGate(config.teacher_pin),
        clipboard=print_to_terminal,
        export_dir=config.export_dir,
    )


def run_cli(config_path: str | None = None) -> None:
    """
    Top-level loop with dispatch for the Home menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    config = Config(config_path)
    setup_logging(config.log_level, config.log_file)

    controller = build_controller(config)

    if controller is None:
        raise SystemExit(1)

    title = formatters.format_banner_text("HOMEWORK TRACKER")
    options = [
        (f"Group {group} entry", lambda group=group: entry_menu.run(controller, group))
        for group in GROUPS
    ]
    options.append(("Teacher dashboard", lambda: dashboard_menu.run(controller)))
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


def main() -> None:
    parser = argparse.ArgumentParser(description="Homework Tracker")
    parser.add_argument(
        "--config", help="Path to config file (default: ./config.yaml)"
    )

    args = parser.parse_args()

    run_cli(args.config)


if __name__ == "__main__":
    main()
