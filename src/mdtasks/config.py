"""Local configuration for mdtasks."""

from __future__ import annotations

import os


DEFAULT_TASK_FILE = "tasks.md"
DEFAULT_ENCODING = "utf-8"
DEFAULT_BULLET = "*"
DEFAULT_LOG_LEVEL = "WARNING"

# Task file used by the command-line tool when --file is not given.
MDTASKS_FILE = os.getenv("MDTASKS_FILE", DEFAULT_TASK_FILE)
MDTASKS_ENCODING = os.getenv("MDTASKS_ENCODING", DEFAULT_ENCODING)
# Bullet marker for lists created by add/shift.
MDTASKS_BULLET = os.getenv("MDTASKS_BULLET", DEFAULT_BULLET)
MDTASKS_LOG_LEVEL = os.getenv("MDTASKS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
