# cli/menus/entry_menu.py

"""
Group Entry menu for the Homework Tracker CLI.

Summary:
- An aide picks a group; every member starts drafted as Submitted.
- The aide picks the entry date and homework (from the catalog or typed in),
  marks the exceptions student by student, then submits.
- Leaving the menu without submitting discards the drafts; nothing is written.

All state changes go through the `Controller`; this module only prompts and prints.
"""

import datetime
from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.controller import Controller
from core.response import ErrorCode
from models.homework_status import HomeworkStatus
from models.student import Student


def run(controller: Controller, group: int) -> None:
    """
    Top-level loop with dispatch for the Group Entry menu.

    Args:
        controller (Controller): The active `Controller`.
        group (int): The group selected on the Home menu.

    Notes:
        - Returning via "0" abandons the session without confirmation.
        - A successful submit returns to the Home menu immediately.
    """
    select_response = controller.select_group(group)

    if not select_response.success:
        helpers.display_response_failure(select_response)
        return

    students: list[Student] = select_response.data["students"]

    if not students:
        print(f"\nGroup {group} has no students.")

    options = [
        ("Change entry date", lambda: change_entry_date(controller)),
        ("Choose homework", lambda: choose_homework(controller)),
        ("Mark a student", lambda: mark_student(controller, students)),
        ("Submit records", lambda: submit_records(controller)),
    ]
    zero_option = "Leave without submitting"

    while True:
        display_drafts(controller, students)

        menu_response = helpers.display_menu(
            formatters.format_banner_text(f"GROUP {group} ENTRY"), options, zero_option
        )

        if menu_response is MenuSignal.EXIT:
            controller.leave_entry()
            print("\nDrafts discarded.")
            break

        elif callable(menu_response):
            submitted = menu_response()

            if submitted is True:
                break

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Home menu")


def display_drafts(controller: Controller, students: list[Student]) -> None:
    state = controller.state
    entry = state.entry
    homework = state.current_homework or "[NONE]"

    print(
        f"\nDate: {formatters.format_entry_date_long(state.current_date)} | Homework: {homework}"
    )

    for student in students:
        print(
            f"... {model_formatters.format_draft_line(student, entry.status_for(student.id))}"
        )


def change_entry_date(controller: Controller) -> None:
    entry_date = helpers.prompt_date_or_default(
        "Enter the entry date", controller.state.current_date
    )

    if entry_date is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    controller.set_current_date(cast(datetime.date, entry_date))


def choose_homework(controller: Controller) -> None:
    """
    Sets the current homework from the catalog, or from a typed-in name.

    Notes:
        - A typed-in name is used for this entry only; it is not added to the catalog.
        - A blank typed-in name keeps the previous homework.
    """
    names = controller.tracker.homework_names()
    custom_option = "+ Enter a new name ..."

    choice = helpers.prompt_selection_from_list(names + [custom_option], "Homework")

    if choice is None:
        helpers.returning_without_changes()
        return

    if choice == custom_option:
        typed = helpers.prompt_user_input_or_cancel(
            "Enter the homework name (leave blank to cancel):"
        )

        if typed is MenuSignal.CANCEL:
            helpers.returning_without_changes()
            return

        choice = cast(str, typed)

    controller.set_current_homework(choice)


def mark_student(controller: Controller, students: list[Student]) -> None:
    student = helpers.prompt_selection_from_list(
        students, "Students", model_formatters.format_student_oneline
    )

    if student is None:
        return

    status = helpers.prompt_selection_from_list(
        list(HomeworkStatus), f"Status for {student.name}", lambda s: s.label
    )

    if status is None:
        helpers.returning_without_changes()
        return

    response = controller.set_status(student.id, status)

    if not response.success:
        helpers.display_response_failure(response)


def submit_records(controller: Controller) -> bool:
    """
    Submits the drafts as records.

    Returns:
        True if the session was closed (records appended, even if saving failed), False otherwise.
    """
    response = controller.submit_entry()

    if response.success:
        print(f"\n{response.detail}")
        return True

    helpers.display_response_failure(response)

    if response.error is ErrorCode.STORAGE_ERROR:
        print("The records are kept for this session but were not saved to disk.")
        return True

    return False
