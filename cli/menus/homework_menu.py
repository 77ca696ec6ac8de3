# cli/menus/homework_menu.py

"""
Manage Homework Items menu for the Homework Tracker CLI.

Adds and removes the catalog names offered on the Group Entry menu. Removing an
item never touches records that already use its name.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.controller import Controller


def run(controller: Controller) -> None:
    """
    Top-level loop with dispatch for the Manage Homework Items menu.

    Args:
        controller (Controller): The active `Controller`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    mgmt_response = controller.open_homework_mgmt()

    if not mgmt_response.success:
        helpers.display_response_failure(mgmt_response)
        return

    title = formatters.format_banner_text("Manage Homework Items")
    options = [
        ("Add homework item", add_homework_item),
        ("Remove homework item", find_and_remove_homework_item),
        ("View homework items", view_homework_items),
    ]
    zero_option = "Return to Teacher Dashboard"

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
        controller.back_to_dashboard()

    helpers.returning_to("Teacher Dashboard")


def add_homework_item(controller: Controller) -> None:
    name_input = helpers.prompt_user_input_or_cancel(
        "Enter the homework name (leave blank to cancel):"
    )

    if name_input is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    add_response = controller.add_homework_item(cast(str, name_input))

    if not add_response.success:
        helpers.display_response_failure(add_response)
        return

    print(f"\n{add_response.detail}")


def find_and_remove_homework_item(controller: Controller) -> None:
    item = helpers.prompt_selection_from_list(
        controller.tracker.all_homework_items(),
        "Homework Items",
        model_formatters.format_homework_item_oneline,
    )

    if item is None:
        helpers.returning_without_changes()
        return

    if not helpers.confirm_action(f"Remove '{item.name}' from the homework list?"):
        helpers.returning_without_changes()
        return

    remove_response = controller.remove_homework_item(item.id)

    if not remove_response.success:
        helpers.display_response_failure(remove_response)
        return

    print(f"\n{remove_response.detail or 'Homework item removed.'}")


def view_homework_items(controller: Controller) -> None:
    items = controller.tracker.all_homework_items()

    if not items:
        print("\nThe homework list is empty.")
        return

    print(f"\n{formatters.format_banner_text('Homework Items')}")
    helpers.display_results(items, True, model_formatters.format_homework_item_oneline)
