"""A console front end for the employee manager.

The view shows the employee list as a table and a single add/edit
form.  It talks to the REST API through
:class:`employee_api_client.EmployeeAPIClient` and re-fetches the whole
list after every successful change, so what is shown always mirrors
the database rather than a locally patched copy.

Commands:

* ``list`` – reload and print the employee table.
* ``add`` – fill in the form and create a new employee.
* ``edit <id>`` – load an employee into the form, edit and save it.
* ``delete <id>`` – delete an employee after confirmation.
* ``help`` – show the commands.
* ``quit`` – leave.

The console reads ``EMPLOYEE_API_BASE_URL`` (default
``http://localhost:5000/api``) from the environment or a ``.env``
file.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from employee_api_client import DEFAULT_BASE_URL, EmployeeAPIClient

logger = logging.getLogger(__name__)

# Form fields in display order: (wire name, label)
FORM_FIELDS = (
    ("name", "Employee Name"),
    ("mobileNumber", "Mobile Number"),
    ("department", "Department"),
    ("salary", "Salary"),
)

DELETE_CONFIRMATION = "Are you sure you want to delete this employee?"

Notifier = Callable[[str, str], None]
Confirmer = Callable[[str], bool]


def empty_draft() -> Dict[str, str]:
    return {field: "" for field, _ in FORM_FIELDS}


def console_notify(level: str, text: str) -> None:
    """Print a notification; errors are logged as well."""
    if level == "error":
        logger.error(text)
    print(f"[{level}] {text}")


def console_confirm(question: str) -> bool:
    answer = input(f"{question} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


class EmployeeCrudView:
    """State and actions of the employee list and its add/edit form."""

    def __init__(
        self,
        client: EmployeeAPIClient,
        *,
        notify: Optional[Notifier] = None,
        confirm: Optional[Confirmer] = None,
    ) -> None:
        self.client = client
        self.notify = notify or console_notify
        self.confirm = confirm or console_confirm
        self.employees: List[Dict[str, Any]] = []
        self.draft: Dict[str, str] = empty_draft()
        self.is_editing = False
        self.editing_id: Optional[Any] = None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def load_all(self) -> bool:
        """Replace the list with the server's current contents.

        On failure the previous list is kept as is.
        """
        employees, error = self.client.list_employees()
        if error:
            self.notify("error", f"Error fetching employees: {error['message']}")
            return False
        self.employees = employees
        return True

    def start_add(self) -> None:
        self.is_editing = False
        self.editing_id = None
        self.draft = empty_draft()

    def start_edit(self, employee_id: Any) -> bool:
        """Load one employee into the draft and switch to edit mode."""
        employee, error = self.client.get_employee(employee_id)
        if error or employee is None:
            message = error["message"] if error else "Employee details not found"
            self.notify("error", f"Error fetching employee data: {message}")
            return False
        self.draft = {
            field: "" if employee.get(field) is None else str(employee.get(field))
            for field, _ in FORM_FIELDS
        }
        self.editing_id = employee_id
        self.is_editing = True
        return True

    def set_field(self, name: str, value: str) -> None:
        if name not in self.draft:
            raise KeyError(name)
        self.draft[name] = value

    def submit(self) -> bool:
        """Create or update depending on the mode, then reload.

        The draft is kept when the request fails so it can be corrected.
        """
        payload = dict(self.draft)
        if self.is_editing:
            _, error = self.client.update_employee(self.editing_id, payload)
            success_text = "Employee updated successfully."
        else:
            _, error = self.client.create_employee(payload)
            success_text = "Employee added successfully."
        if error:
            self.notify("error", f"Error saving employee: {error['message']}")
            return False
        self.notify("success", success_text)
        self.load_all()
        self.start_add()
        return True

    def delete(self, employee_id: Any) -> bool:
        if not self.confirm(DELETE_CONFIRMATION):
            return False
        _, error = self.client.delete_employee(employee_id)
        if error:
            self.notify("error", f"Error deleting employee: {error['message']}")
            return False
        self.notify("success", "Employee deleted successfully.")
        self.load_all()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render_table(self) -> str:
        headers = ["ID"] + [label for _, label in FORM_FIELDS]
        rows = [
            [str(emp.get("id", ""))] + [str(emp.get(field, "")) for field, _ in FORM_FIELDS]
            for emp in self.employees
        ]
        widths = [len(h) for h in headers]
        for row in rows:
            widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

        def fmt(cells: List[str]) -> str:
            return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths))

        lines = ["Employees List", fmt(headers), "-+-".join("-" * w for w in widths)]
        lines.extend(fmt(row) for row in rows)
        if not rows:
            lines.append("(no employees)")
        return "\n".join(lines)

    def render_form(self) -> str:
        title = "Edit employee" if self.is_editing else "Add new employee"
        lines = [title]
        lines.extend(f"  {label}: {self.draft[field]}" for field, label in FORM_FIELDS)
        return "\n".join(lines)


class EmployeeConsole:
    """Interactive command loop around an :class:`EmployeeCrudView`."""

    def __init__(
        self,
        view: EmployeeCrudView,
        *,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self.view = view
        self.input = input_func
        self.output = output

    def _handle_help(self, args: str) -> None:
        self.output("Commands: list, add, edit <id>, delete <id>, help, quit")

    def _handle_list(self, args: str) -> None:
        self.view.load_all()
        self.output(self.view.render_table())

    def _fill_form(self) -> None:
        self.output(self.view.render_form())
        for field, label in FORM_FIELDS:
            current = self.view.draft[field]
            value = self.input(f"{label} [{current}]: ").strip()
            if value:
                self.view.set_field(field, value)

    def _handle_add(self, args: str) -> None:
        self.view.start_add()
        self._fill_form()
        if self.view.submit():
            self.output(self.view.render_table())

    def _handle_edit(self, args: str) -> None:
        if not args:
            self.output("Usage: edit <id>")
            return
        if not self.view.start_edit(args):
            return
        self._fill_form()
        if self.view.submit():
            self.output(self.view.render_table())

    def _handle_delete(self, args: str) -> None:
        if not args:
            self.output("Usage: delete <id>")
            return
        if self.view.delete(args):
            self.output(self.view.render_table())

    def dispatch(self, line: str) -> bool:
        """Run one command line.  Returns ``False`` when the loop should stop."""
        command, _, args = line.strip().partition(" ")
        command = command.lower()
        if not command:
            return True
        if command in {"quit", "exit"}:
            return False
        handler = getattr(self, f"_handle_{command}", None)
        if handler is None:
            self.output(f"Unknown command: {command}")
            self._handle_help("")
            return True
        handler(args.strip())
        return True

    def run(self) -> None:
        """Load the list and process commands until ``quit`` or EOF."""
        self._handle_list("")
        self._handle_help("")
        try:
            while self.dispatch(self.input("> ")):
                pass
        except (EOFError, KeyboardInterrupt):
            logger.info("Console stopped by user.")


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
    base_url = os.getenv("EMPLOYEE_API_BASE_URL", DEFAULT_BASE_URL)
    view = EmployeeCrudView(EmployeeAPIClient(base_url=base_url))
    EmployeeConsole(view).run()


if __name__ == "__main__":
    main()
