"""
Operations package - Application service layer between hosts and the client.

This package provides the BackendOperations facade that sequences amazee.ai
calls for a host application, plus the exit code mapping and output
formatting used by the CLI.
"""
from .facade import BackendOperations
from .mappers import exit_code_for, run_and_exit

__all__ = ["BackendOperations", "exit_code_for", "run_and_exit"]
