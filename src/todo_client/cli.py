"""Terminal front end for Todo Master.

Redraws the screen after each command: error banner, total count, filter
summary and the first five matching todos.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from todo_api.models import Category, Priority

from .api import TodoAPI
from .state import ALL, TodoState
from .views import FormValidationError, TodoForm, TodoList

PRIORITY_CHOICES = [p.value for p in Priority]
CATEGORY_CHOICES = [c.value for c in Category]


class CLI:
    def __init__(
        self,
        state: TodoState,
        form: Optional[TodoForm] = None,
        todo_list: Optional[TodoList] = None,
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self.state = state
        self.form = form or TodoForm()
        self.todo_list = todo_list or TodoList()
        self._input = input_fn

    def run(self) -> None:
        """Main REPL loop; exits on 'quit', EOF or Ctrl-C."""
        self.state.fetch_todos()
        try:
            while True:
                print(self.render())
                line = self._input("\n: ").strip()
                if not line:
                    continue
                if line.lower() in {"quit", "exit"}:
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            pass
        print("Goodbye.")

    def render(self) -> str:
        lines: List[str] = []
        if self.state.error:
            lines.append(f"! {self.state.error}")
        lines.append(f"Total Todos: {self.state.total}")
        if self.state.loading:
            lines.append("Loading your todos...")
            return "\n".join(lines)
        visible = self.state.visible_todos()
        lines.append(
            f"Your Todos ({len(visible)} found) "
            f"search={self.state.search_term!r} priority={self.state.filter_priority} "
            f"category={self.state.filter_category}"
        )
        lines.extend(self.todo_list.render_lines(visible))
        return "\n".join(lines)

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        if cmd == "add":
            self._add()
        elif cmd == "done":
            self._cmd_done(tokens)
        elif cmd == "search":
            self.state.search_term = " ".join(tokens[1:])
        elif cmd == "priority":
            self._cmd_filter(tokens, PRIORITY_CHOICES, "filter_priority")
        elif cmd == "category":
            self._cmd_filter(tokens, CATEGORY_CHOICES, "filter_category")
        elif cmd == "clear":
            self.state.clear_filters()
        elif cmd == "refresh":
            self.state.fetch_todos()
        elif cmd == "help":
            self._help()
        else:
            print("Unknown command. Type 'help' for instructions.")

    def _cmd_done(self, tokens: List[str]) -> None:
        if len(tokens) != 2 or not tokens[1].isdigit():
            print("Usage: done <id>")
            return
        self.state.mark_as_done(int(tokens[1]))

    def _cmd_filter(self, tokens: List[str], choices: List[str], attr: str) -> None:
        value = tokens[1].lower() if len(tokens) == 2 else ""
        if value != ALL and value not in choices:
            print(f"Usage: {tokens[0].lower()} <{'|'.join(choices)}|all>")
            return
        setattr(self.state, attr, value)

    # -------------------- user-interactive flows --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  add                       Add a new todo (prompts for each field)")
        print("  done <id>                 Mark a todo as done (removes it)")
        print("  search <text>             Filter by title/description; 'search' alone clears it")
        print("  priority <level|all>      Filter by priority: " + ", ".join(PRIORITY_CHOICES))
        print("  category <name|all>       Filter by category: " + ", ".join(CATEGORY_CHOICES))
        print("  clear                     Clear search and filters")
        print("  refresh                   Reload todos from the server")
        print("  quit                      Exit")

    def _prompt_choice(self, name: str, choices: List[str]) -> None:
        current = self.form.data[name]
        raw = self._input(f"{name.capitalize()} ({'/'.join(choices)}) [{current}]: ").strip().lower()
        if not raw:
            return
        if raw not in choices:
            print(f"Invalid {name}; keeping {current}.")
            return
        self.form.handle_change(name, raw)

    def _add(self) -> None:
        self.form.handle_change("title", self._input("Todo title: "))
        self.form.handle_change("description", self._input("Description: "))
        self._prompt_choice("priority", PRIORITY_CHOICES)
        self._prompt_choice("category", CATEGORY_CHOICES)
        try:
            self.form.submit(self.state.add_todo)
        except FormValidationError as e:
            print(e)


# PUBLIC_INTERFACE
def main() -> None:
    """Run the terminal client against TODO_API_URL."""
    logging.basicConfig(level=logging.WARNING)
    with TodoAPI() as api:
        CLI(TodoState(api)).run()


if __name__ == "__main__":
    main()
