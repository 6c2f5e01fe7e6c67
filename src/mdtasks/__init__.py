"""mdtasks: manage a task list kept in a Markdown file."""

__version__ = "0.1.0"

from mdtasks.exceptions import (
    DuplicateTaskError,
    MalformedTaskError,
    MdTasksError,
    NoSectionError,
    SectionError,
    SectionNotFoundError,
    TaskError,
    TaskFileError,
    TaskFileNotFoundError,
    TaskNotFoundError,
)
from mdtasks.markdown import serialize_document
from mdtasks.markdown_parser import parse_markdown
from mdtasks.schemas import Document, RemovedTask, SectionTasks, Task
from mdtasks.storage import load_task_list, read_task_file, save_task_list, write_task_file
from mdtasks.task_list import TaskList

__all__ = [
    "Document",
    "DuplicateTaskError",
    "MalformedTaskError",
    "MdTasksError",
    "NoSectionError",
    "RemovedTask",
    "SectionError",
    "SectionNotFoundError",
    "SectionTasks",
    "Task",
    "TaskError",
    "TaskFileError",
    "TaskFileNotFoundError",
    "TaskList",
    "TaskNotFoundError",
    "load_task_list",
    "parse_markdown",
    "read_task_file",
    "save_task_list",
    "serialize_document",
    "write_task_file",
]
