"""
Todo Master HTTP API package.

Importing this package has no side effects; build an application with
create_app(), or import todo_api.main for the process-wide instance.
"""

from .app import create_app  # noqa: F401
