"""Command-line interface: ``mdtasks add|shift|remove|list``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mdtasks import __version__
from mdtasks.config import MDTASKS_FILE, MDTASKS_LOG_LEVEL
from mdtasks.exceptions import MdTasksError
from mdtasks.ids import generate_task_ids
from mdtasks.interactive import prompt_select_task_id, prompt_task_text
from mdtasks.storage import load_task_list, save_task_list
from mdtasks.task_list import TaskList
from mdtasks.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdtasks", description="Simple task management tool based on Markdown."
    )
    parser.add_argument(
        "-f", "--file", default=MDTASKS_FILE, help=f"Task file (default: {MDTASKS_FILE})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="add tasks to a section")
    add.add_argument("text", nargs="*", help="Task text, one task per argument")
    add.add_argument(
        "-s", "--section", default="0", help="Section number or title (default: 0)"
    )
    add.set_defaults(handler=_run_add)

    shift = subparsers.add_parser("shift", help="shift an existing task to another section")
    shift.add_argument("id", nargs="?", help="Task ID (prompted when omitted)")
    shift.add_argument("-s", "--step", type=int, default=1, help="Number of sections (default: 1)")
    shift.add_argument("-b", "--backward", action="store_true", help="Shift backward")
    shift.set_defaults(handler=_run_shift)

    remove = subparsers.add_parser("remove", help="remove a task")
    remove.add_argument("id", nargs="?", help="Task ID (prompted when omitted)")
    remove.set_defaults(handler=_run_remove)

    list_ = subparsers.add_parser("list", help="list tasks by section")
    list_.set_defaults(handler=_run_list)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else MDTASKS_LOG_LEVEL)

    try:
        args.handler(args)
    except (MdTasksError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def _run_add(args: argparse.Namespace) -> None:
    path = Path(args.file)
    task_list = load_task_list(path)
    section = _resolve_section(task_list, args.section)
    texts = args.text or [prompt_task_text()]

    for task_id, text in zip(generate_task_ids(len(texts)), texts):
        task_list.add_item(task_id, text, section)
        print(f"Added: {task_id}: {text.strip()}")

    save_task_list(path, task_list)


def _resolve_section(task_list: TaskList, value: str) -> int:
    """Accept a section ordinal (``0``, ``1``...) or a section title."""
    try:
        return int(value)
    except ValueError:
        return task_list.find_section(value)


def _run_shift(args: argparse.Namespace) -> None:
    path = Path(args.file)
    task_list = load_task_list(path)
    task_id = args.id or prompt_select_task_id(task_list.tasks())

    step = -args.step if args.backward else args.step
    current = task_list.get_section_id_by_task_id(task_id)
    task = task_list.shift_item(task_id, current + step)
    print(f"Shifted: {task.id}: {task.text} -> {task.section_title}")

    save_task_list(path, task_list)


def _run_remove(args: argparse.Namespace) -> None:
    path = Path(args.file)
    task_list = load_task_list(path)
    task_id = args.id or prompt_select_task_id(task_list.tasks())

    removed = task_list.remove_item(task_id)
    print(f"Removed: {removed.id}: {removed.text}")

    save_task_list(path, task_list)


def _run_list(args: argparse.Namespace) -> None:
    task_list = load_task_list(Path(args.file))
    for index, section in enumerate(task_list.tasks()):
        if index:
            print()
        print(f"## {section.title}")
        for task in section.tasks:
            print(f"{task.id}: {task.text}")
