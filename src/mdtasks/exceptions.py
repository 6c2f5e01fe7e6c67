"""Custom exceptions for mdtasks."""


class MdTasksError(Exception):
    """Base exception for mdtasks operations."""


class SectionError(MdTasksError):
    """Error while resolving a section."""


class NoSectionError(SectionError):
    """Document has no level-2 heading."""


class SectionNotFoundError(SectionError):
    """Requested section does not exist."""


class TaskError(MdTasksError):
    """Error while resolving a task."""


class TaskNotFoundError(TaskError):
    """No list item carries the requested task ID."""


class MalformedTaskError(TaskError):
    """List item does not have the "ID: text" paragraph shape."""


class DuplicateTaskError(TaskError):
    """Task ID is already used in the document."""


class TaskFileError(MdTasksError):
    """Error while reading or writing the task file."""


class TaskFileNotFoundError(TaskFileError):
    """Task file does not exist."""
