"""
Human-readable output formatting.

Centralizes all CLI output formatting so that commands stay thin. Secret
material is masked unless the caller asks for it explicitly.
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import TeamCredentials, TeamResponse

_console = Console()
_err_console = Console(stderr=True)


def print_health(healthy: bool, api_url: str) -> None:
    """Print the result of a health check."""
    if healthy:
        _console.print(f"[green]Healthy:[/] {escape(api_url)}")
    else:
        _console.print(f"[red]Unhealthy:[/] {escape(api_url)}")


def print_team(team: TeamResponse, verbose: bool = False) -> None:
    """
    Print team information in human-readable format.

    Args:
        team: Team to display
        verbose: Also show contact, billing and timestamp fields
    """
    _console.print(f"[bold]Team:[/] {escape(team.name)}")
    _console.print(f"[bold]ID:[/] {team.id}")
    _console.print(f"[bold]Admin:[/] {escape(team.admin_email)}")
    _console.print(f"[bold]Active:[/] {'yes' if team.is_active else 'no'}")

    if verbose:
        _console.print(f"[bold]Always free:[/] {'yes' if team.is_always_free else 'no'}")
        _console.print(f"[bold]Phone:[/] {escape(team.phone or '-')}")
        _console.print(f"[bold]Billing address:[/] {escape(team.billing_address or '-')}")
        _console.print(f"[bold]Created:[/] {team.created_at.isoformat()}")
        _console.print(f"[bold]Updated:[/] {team.updated_at.isoformat()}")
        last_payment = team.last_payment.isoformat() if team.last_payment else "never"
        _console.print(f"[bold]Last payment:[/] {last_payment}")


def print_credentials(credentials: TeamCredentials, show_secrets: bool = False) -> None:
    """
    Print generated LLM and VDB keys for a team.

    Args:
        credentials: Key bundle to display
        show_secrets: Print tokens and passwords in full instead of masked
    """
    llm = credentials.llm_keys
    vdb = credentials.vdb_keys

    def secret(value: str) -> str:
        return escape(value if show_secrets else mask_secret(value))

    _console.print(f"[bold]Keys for team:[/] {escape(credentials.team_id)}")

    table = Table(title="Credentials")
    table.add_column("Field", style="cyan")
    table.add_column("LLM", style="yellow")
    table.add_column("VDB", style="yellow")

    table.add_row("name", escape(llm.name), escape(vdb.name))
    table.add_row("region", escape(llm.region), escape(vdb.region))
    table.add_row("api url", escape(llm.litellm_api_url), escape(vdb.litellm_api_url))
    table.add_row("token", secret(llm.litellm_token), secret(vdb.litellm_token))
    table.add_row("database", escape(f"{llm.database_username}@{llm.database_host}/{llm.database_name}"), "-")
    table.add_row("password", secret(llm.database_password), "-")

    _console.print(table)


def print_error(exc: BaseException) -> None:
    """Print an error message to stderr."""
    _err_console.print(f"[red]Error:[/] {escape(str(exc))}", highlight=False)


def mask_secret(value: str, visible: int = 4) -> str:
    """Keep the first ``visible`` characters of a secret and hide the rest."""
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * 8
