"""
CLI Client Module.

Command-line client built with Typer for the remote record API.

Architecture:
- CLI is a thin presentation layer over RecordService
- All persistence lives in the remote API, reached over HTTP (httpx)
"""
