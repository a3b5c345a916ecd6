"""Task repository - SQLite by default, any SQLAlchemy URL via config.

This package provides:
- Database models for projects and tasks
- Repository functions for CRUD operations
- Two-phase persistence of batch editor submissions
- JSON export / import of all data
"""

from .repo import (
    init_db,
    list_projects,
    get_project,
    create_project,
    rename_project,
    set_project_pinned,
    delete_project,
    list_tasks,
    get_task,
    create_task,
    update_task,
    toggle_task,
    delete_task,
    apply_commands,
    export_data,
    import_data,
)

__all__ = [
    "init_db",
    "list_projects",
    "get_project",
    "create_project",
    "rename_project",
    "set_project_pinned",
    "delete_project",
    "list_tasks",
    "get_task",
    "create_task",
    "update_task",
    "toggle_task",
    "delete_task",
    "apply_commands",
    "export_data",
    "import_data",
]
