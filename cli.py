#!/usr/bin/env python3
"""
CLI Client.

Command-line client for the remote record API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                  # Show help

    # Records
    python cli.py records create --name Widget            # Create a record
    python cli.py records get abc123                      # Fetch one record
    python cli.py records list                            # List all records
    python cli.py records update abc123 --name Gadget     # Replace a record
    python cli.py records delete abc123                   # Delete a record

    # System info
    python cli.py system info                             # Show app info
    python cli.py system config                           # Show configuration

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (wires the record API)
    --release         Release mode (record API only with --base-url)
    --base-url        Remote API base URL (or CRUD_BASE_URL)
    --help            Show help message
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from crud_client.cli.main import app  # noqa: E402

if __name__ == "__main__":
    app()
