"""
polydock-amazeeai CLI

Drives the operations facade from a shell, using environment variables as
the app instance:
- health: Check that the backend is reachable and healthy
- create-team: Create a team and set up its administrator
- generate-keys: Generate LLM and VDB keys for a team
- get-team: Show team details
"""
from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from .cli_context import CLIContext
from .errors import ServiceUnavailableError
from .operations import run_and_exit
from .operations.printers import print_credentials, print_health, print_team
from .settings import ADMIN_EMAIL_KEY, BACKEND_TOKEN_KEY, BACKEND_URL_KEY, DEFAULT_BACKEND_URL, PROJECT_NAME_KEY

app = typer.Typer(name="polydock-amazeeai", help="amazee.ai team and key management CLI")

TOKEN_OPTION = typer.Option(None, "--token", help="Backend token (default: $AMAZEE_AI_BACKEND_TOKEN)")
URL_OPTION = typer.Option(None, "--url", help="Backend URL (default: $AMAZEE_AI_BACKEND_URL)")


def _context(token: Optional[str], url: Optional[str], **overrides: Optional[str]) -> CLIContext:
    return CLIContext.from_env({BACKEND_TOKEN_KEY: token, BACKEND_URL_KEY: url, **overrides})


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log backend calls to stderr")
) -> None:
    """amazee.ai team and key management CLI."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def health(
    token: Optional[str] = TOKEN_OPTION,
    url: Optional[str] = URL_OPTION,
) -> None:
    """Check that the backend is reachable and healthy."""

    def _health() -> None:
        with _context(token, url) as context:
            api_url = context.app_instance.get_key_value(BACKEND_URL_KEY) or DEFAULT_BACKEND_URL
            try:
                # configuring the facade runs the health check
                _ = context.operations
            except ServiceUnavailableError:
                print_health(False, api_url)
                raise
            print_health(True, api_url)

    run_and_exit(_health)


@app.command("create-team")
def create_team(
    project_name: Optional[str] = typer.Option(None, "--project-name", help="Team name (default: $LAGOON_PROJECT_NAME)"),
    admin_email: Optional[str] = typer.Option(None, "--admin-email", help="Administrator email (default: $AMAZEE_AI_ADMIN_EMAIL)"),
    token: Optional[str] = TOKEN_OPTION,
    url: Optional[str] = URL_OPTION,
    verbose: bool = typer.Option(False, "--verbose", help="Show all team fields"),
) -> None:
    """Create a team and set up its administrator."""

    def _create_team() -> None:
        with _context(token, url, **{PROJECT_NAME_KEY: project_name, ADMIN_EMAIL_KEY: admin_email}) as context:
            team = context.operations.create_team_and_setup_administrator(context.app_instance)
        print_team(team, verbose=verbose)

    run_and_exit(_create_team)


@app.command("generate-keys")
def generate_keys(
    team_id: str = typer.Argument(..., help="Team to generate keys for"),
    token: Optional[str] = TOKEN_OPTION,
    url: Optional[str] = URL_OPTION,
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print tokens and passwords unmasked"),
) -> None:
    """Generate LLM and VDB keys for a team."""

    def _generate_keys() -> None:
        with _context(token, url) as context:
            credentials = context.operations.generate_keys_for_team(context.app_instance, team_id)
        print_credentials(credentials, show_secrets=show_secrets)

    run_and_exit(_generate_keys)


@app.command("get-team")
def get_team(
    team_id: str = typer.Argument(..., help="Team to show"),
    token: Optional[str] = TOKEN_OPTION,
    url: Optional[str] = URL_OPTION,
    verbose: bool = typer.Option(False, "--verbose", help="Show all team fields"),
) -> None:
    """Show team details."""

    def _get_team() -> None:
        with _context(token, url) as context:
            team = context.operations.get_team_details(team_id)
        print_team(team, verbose=verbose)

    run_and_exit(_get_team)


if __name__ == "__main__":
    app()
