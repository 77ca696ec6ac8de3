# cli/menus/dashboard_menu.py

"""
Teacher Dashboard menu for the Homework Tracker CLI.

This module defines the teacher-only interface, reached through the shared PIN:
- Today's progress summary and the weekly warning list
- Parent notification text for students with missing homework
- Record history with date and name filters, and record deletion
- CSV export of every record
- Homework catalog management (see `homework_menu`)

All operations are routed through the `Controller`, which refuses teacher actions
until the PIN gate has been passed.
"""

import cli.menu_helpers as helpers
import cli.menus.homework_menu as homework_menu
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.controller import Controller
from core.response import ErrorCode
from models.homework_record import HomeworkRecord


def run(controller: Controller) -> None:
    """
    Top-level loop with dispatch for the Teacher Dashboard menu.

    Args:
        controller (Controller): The active `Controller`.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The login prompt repeats until the PIN matches or the user cancels with a blank entry.
        - The finally block guarantees the session is logged out before returning.
    """
    if not login(controller):
        helpers.returning_to("Home menu")
        return

    title = formatters.format_banner_text("Teacher Dashboard")
    options = [
        ("View today's progress", view_today_progress),
        ("Weekly warning list", warning_list_menu),
        ("View history", view_history),
        ("Delete a record", find_and_delete_record),
        ("Export records to CSV", export_records),
        ("Manage homework items", homework_menu.run),
    ]
    zero_option = "Log out and return to Home menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response(controller)

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        controller.logout()

    helpers.returning_to("Home menu")


# === login ===


def login(controller: Controller) -> bool:
    controller.open_teacher_login()

    while True:
        pin_input = helpers.prompt_user_input_or_cancel(
            "Enter the teacher PIN (leave blank to cancel):"
        )

        if pin_input is MenuSignal.CANCEL:
            controller.cancel_login()
            return False

        login_response = controller.login(str(pin_input))

        if login_response.success:
            print(f"\n{login_response.detail}")
            return True

        helpers.display_response_failure(login_response)


# === dashboard reads ===


def view_today_progress(controller: Controller) -> None:
    stats_response = controller.dashboard_stats()

    if not stats_response.success:
        helpers.display_response_failure(stats_response)
        return

    print(f"\n{model_formatters.format_today_progress(stats_response.data['progress'])}")


def warning_list_menu(controller: Controller) -> None:
    """
    Shows students missing homework three or more times in the last week, and offers their parent notices.

    Args:
        controller (Controller): The active `Controller`.
    """
    while True:
        warnings_response = controller.warning_list()

        if not warnings_response.success:
            helpers.display_response_failure(warnings_response)
            return

        entries = warnings_response.data["warnings"]

        if not entries:
            print("\nNo students are on the warning list this week.")
            return

        entry = helpers.prompt_selection_from_list(
            entries, "Weekly Warning List", model_formatters.format_warning_entry
        )

        if entry is None:
            return

        copy_response = controller.copy_notification(entry.student)

        if copy_response.success:
            print(f"\n{copy_response.detail}")

        elif copy_response.error is ErrorCode.CLIPBOARD_ERROR:
            helpers.display_response_failure(copy_response)
            print(f"\n{copy_response.data['text']}")

        else:
            helpers.display_response_failure(copy_response)


# === history ===


def prompt_history_records(controller: Controller) -> list[HomeworkRecord] | None:
    date_filter = helpers.prompt_date_or_none("Filter by date")
    name_filter = helpers.prompt_user_input_or_none(
        "Filter by student name (leave blank for any):"
    )

    history_response = controller.history(date_filter, name_filter)

    if not history_response.success:
        helpers.display_response_failure(history_response)
        return None

    return history_response.data["records"]


def view_history(controller: Controller) -> None:
    records = prompt_history_records(controller)

    if records is None:
        return

    if not records:
        print("\nNo records match those filters.")
        return

    banner = formatters.format_banner_text(f"History ({len(records)} records)")
    print(f"\n{banner}")

    helpers.display_results(
        records,
        False,
        lambda r: model_formatters.format_record_oneline(r, controller.tracker),
    )


def find_and_delete_record(controller: Controller) -> None:
    """
    Lets the teacher pick a record from a filtered history and deletes it after confirmation.

    Args:
        controller (Controller): The active `Controller`.

    Notes:
        - Deletion is permanent and saved immediately.
    """
    records = prompt_history_records(controller)

    if records is None:
        return

    record = helpers.prompt_selection_from_list(
        records,
        "Matching Records",
        lambda r: model_formatters.format_record_oneline(r, controller.tracker),
    )

    if record is None:
        helpers.returning_without_changes()
        return

    helpers.caution_banner()
    print("You are about to permanently delete the following record:")
    print(model_formatters.format_record_multiline(record, controller.tracker))

    if not helpers.confirm_action("Are you sure you want to delete this record?"):
        helpers.returning_without_changes()
        return

    delete_response = controller.delete_record(record.id)

    if not delete_response.success:
        helpers.display_response_failure(delete_response)
        return

    print("\nRecord deleted.")


# === export ===


def export_records(controller: Controller) -> None:
    print("\nExporting records ...")

    export_response = controller.export_csv()

    if not export_response.success:
        helpers.display_response_failure(export_response)
        return

    print(f"... {export_response.detail}")
