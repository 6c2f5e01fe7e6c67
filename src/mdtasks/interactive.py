"""Interactive prompts for the command-line tool."""

from __future__ import annotations

import sys

from mdtasks.schemas import SectionTasks


def is_interactive() -> bool:
    """Check that both stdin and stdout are TTYs."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def prompt(question: str) -> str:
    """Request a single line of input."""
    try:
        return input(f"{question}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\nAborted.")
        sys.exit(1)


def prompt_task_text() -> str:
    """Ask for the text of a new task.

    Raises:
        ValueError: If there is no terminal to ask on or the answer is empty.
    """
    if not is_interactive():
        raise ValueError("No task text")
    text = prompt("Input Task Text")
    if not text:
        raise ValueError("No task text")
    return text


def prompt_select_task_id(sections: list[SectionTasks]) -> str:
    """Show the tasks grouped by section and return the chosen ID.

    The answer may be the number shown next to a task or a task ID.

    Raises:
        ValueError: If there is no terminal, no task, or no valid answer.
    """
    if not is_interactive():
        raise ValueError("Task ID is not specified")

    choices: list[str] = []
    for section in sections:
        print()
        print(f"## {section.title}")
        for task in section.tasks:
            choices.append(task.id)
            print(f"  {len(choices)}) {task.id}: {task.text}")
    if not choices:
        raise ValueError("There is no task to select")

    answer = prompt("Select Task")
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    if answer in choices:
        return answer
    raise ValueError("Task ID is not specified")
