"""
CLI Commands.

Organized by domain/feature area.
"""

from crud_client.cli.commands.records import app as records_app
from crud_client.cli.commands.system import app as system_app

__all__ = [
    "records_app",
    "system_app",
]
