"""
Interactive menu for TodoApp

Reads numbered choices from stdin and dispatches them to the task store.
Invalid input is re-prompted, never fatal.
"""

from typing import List

from todo_app import TodoApp, Task, Urgency


MENU_ITEMS = [
    (1, "Add Task"),
    (2, "View All Tasks"),
    (3, "View Tasks Sorted by Urgency"),
    (4, "Mark Task as Completed"),
    (5, "Remove Task"),
    (6, "View Statistics"),
    (7, "Export Tasks"),
    (8, "Clear Completed Tasks"),
    (9, "Filter Tasks by Urgency"),
    (0, "Exit"),
]

EXPORT_FORMATS = {
    1: ('text', 'txt'),
    2: ('csv', 'csv'),
    3: ('json', 'json'),
}


class TodoMenu:
    """Numbered menu loop around a TodoApp"""

    def __init__(self, app: TodoApp):
        self.app = app
        self._handlers = {
            1: self.handle_add,
            2: self.show_all,
            3: self.show_sorted,
            4: self.handle_complete,
            5: self.handle_remove,
            6: self.show_statistics,
            7: self.handle_export,
            8: self.handle_clear_completed,
            9: self.handle_filter,
        }

    def run(self) -> None:
        """Main loop; returns when the user picks Exit or input ends"""
        try:
            while True:
                self._print_menu()
                choice = self._read_int("Enter your choice: ")

                if choice == 0:
                    print("Thank you for using TODO App! Goodbye!")
                    break

                handler = self._handlers.get(choice)
                if handler is None:
                    print("Invalid choice! Please select 0-9.")
                else:
                    handler()

                input("\nPress Enter to continue...")
        except (KeyboardInterrupt, EOFError):
            print("\nInterrupted. Goodbye.")
        finally:
            self.app.close()

    # ==================== Input ====================

    def _print_menu(self) -> None:
        print("\n=== TODO APP MENU ===")
        for number, label in MENU_ITEMS:
            print(f"{number}. {label}")

    def _read_int(self, prompt: str) -> int:
        while True:
            raw = input(prompt).strip()
            try:
                return int(raw)
            except ValueError:
                print("Invalid input! Please enter a number.")

    def _read_urgency(self) -> Urgency:
        """Prompt until the user enters 1-4 or an urgency name"""
        while True:
            print("\nSelect urgency level:")
            for urgency in Urgency:
                print(f"{urgency.value}. {urgency.name.capitalize()}")

            urgency = Urgency.lookup(input("Enter urgency (1-4): "))
            if urgency is not None:
                return urgency
            print("Invalid input! Please enter a number between 1-4.")

    def _require_tasks(self, message: str = "No tasks available!") -> bool:
        if self.app.counts()['total'] == 0:
            print(message)
            return False
        return True

    # ==================== Handlers ====================

    def handle_add(self) -> None:
        description = input("Enter task description: ")
        if not description:
            print("Task description cannot be empty!")
            return

        urgency = self._read_urgency()
        task_id = self.app.add(description, urgency)
        print(f"Task added successfully! ID: {task_id}")

    def handle_complete(self) -> None:
        if not self._require_tasks():
            return

        self.show_all()
        task_id = self._read_int("Enter task ID to mark as completed: ")
        if self.app.complete(task_id):
            print("Task marked as completed!")
        else:
            print(f"Task with ID {task_id} not found!")

    def handle_remove(self) -> None:
        if not self._require_tasks():
            return

        self.show_all()
        task_id = self._read_int("Enter task ID to remove: ")
        if self.app.remove(task_id):
            print("Task removed successfully!")
        else:
            print(f"Task with ID {task_id} not found!")

    def handle_export(self) -> None:
        if not self._require_tasks("No tasks to export!"):
            return

        print("\nSelect export format:")
        print("1. Text file (.txt)")
        print("2. CSV file (.csv)")
        print("3. JSON file (.json)")
        choice = self._read_int("Enter format (1-3): ")

        filename = input("Enter filename (without extension): ").strip()
        if not filename:
            filename = self.app.config['export']['default_filename']

        if choice not in EXPORT_FORMATS:
            print("Invalid choice!")
            return

        fmt, extension = EXPORT_FORMATS[choice]
        path = self.app.export_path(filename, extension)

        if self.app.export(fmt, str(path)):
            print(f"✅ Tasks exported successfully to {path}")
        else:
            print("❌ Export failed!")

    def handle_clear_completed(self) -> None:
        removed = self.app.clear_completed()
        if removed > 0:
            print(f"Cleared {removed} completed tasks.")
        else:
            print("No completed tasks to clear.")

    def handle_filter(self) -> None:
        if not self._require_tasks():
            return

        urgency = self._read_urgency()
        tasks = self.app.filter_by_urgency(urgency)
        if not tasks:
            print(f"No tasks found with {urgency.name} urgency.")
            return

        print(f"\n=== TASKS WITH {urgency.name} URGENCY ===")
        print(f"{'ID':<5}{'Description':<40}{'Created':<20}{'Status':<10}")
        print('-' * 75)
        for task in tasks:
            print(
                f"{task.id:<5}{task.description[:39]:<40}"
                f"{task.created_str():<20}{_display_status(task):<10}"
            )
        print()

    # ==================== Views ====================

    def show_all(self) -> None:
        self._print_table("ALL TASKS", self.app.all_tasks())

    def show_sorted(self) -> None:
        self._print_table("TASKS SORTED BY URGENCY", self.app.sorted_by_urgency())

    def show_statistics(self) -> None:
        counts = self.app.counts()
        breakdown = self.app.pending_by_urgency()

        print("\n=== STATISTICS ===")
        print(f"Total Tasks: {counts['total']}")
        print(f"Pending Tasks: {counts['pending']}")
        print(f"Completed Tasks: {counts['completed']}")

        print("\nPending Tasks by Urgency:")
        for urgency in sorted(Urgency, key=lambda u: -u.value):
            print(f"  {urgency.name.capitalize()}: {breakdown[urgency]}")
        print()

    def _print_table(self, title: str, tasks: List[Task]) -> None:
        if not tasks:
            print("No tasks available.")
            return

        print(f"\n=== {title} ===")
        print(f"{'ID':<5}{'Description':<40}{'Urgency':<12}{'Created':<20}{'Status':<10}")
        print('-' * 87)
        for task in tasks:
            print(
                f"{task.id:<5}{task.description[:39]:<40}{task.urgency.name:<12}"
                f"{task.created_str():<20}{_display_status(task):<10}"
            )
        print()


def _display_status(task: Task) -> str:
    # Screens show DONE; exports use COMPLETED
    return 'DONE' if task.completed else 'PENDING'
