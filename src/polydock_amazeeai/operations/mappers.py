"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and CLI command wrappers
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

EXIT_CODES = {
    "WorkflowError": 1,
    "MissingConfigError": 2,
    "ValueError": 2,
    "NotConfiguredError": 3,
    "ServiceUnavailableError": 4,
}

# Used for anything not listed above. The facade re-raises client errors as
# WorkflowError, so they have no code of their own.
FALLBACK_EXIT_CODE = 1


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    - 0: Success
    - 1: Backend operation failed (WorkflowError) or unknown error
    - 2: Missing or invalid configuration (MissingConfigError, ValueError)
    - 3: Client not configured (NotConfiguredError)
    - 4: Backend reachable but unhealthy (ServiceUnavailableError)

    Args:
        exc: Exception to map

    Returns:
        Exit code, with 1 as fallback for unknown exceptions
    """
    return EXIT_CODES.get(type(exc).__name__, FALLBACK_EXIT_CODE)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function and maps any exceptions to appropriate
    exit codes using typer.Exit, after printing the error message.

    Args:
        func: Function to execute

    Returns:
        Function result if successful

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except Exception as e:
        from .printers import print_error
        print_error(e)
        raise typer.Exit(code=exit_code_for(e)) from e
