"""
Task Manager - command-line client for the remote time-tracking service.

This script:
1. Creates, lists and removes tasks on the task service
2. Starts a task's timer, adopting the server's running timer if one exists
3. Shows a live elapsed-time counter until interrupted with ctrl+c

The task_manager package lives under src/, so install it first
(pip install -e .) or use the task-manager console script it provides.
"""

import sys

from task_manager.cli import main

if __name__ == "__main__":
    sys.exit(main())
