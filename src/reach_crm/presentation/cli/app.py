"""Reach CLI application using Typer.

Command-line utilities for the Reach backend: secret generation for
deployment configuration and running the API server.
"""

import secrets

import typer
import uvicorn
from rich.console import Console

from reach_config.settings import get_settings

app = typer.Typer(
    name="reach",
    help="Reach CRM backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


def generate_secret_values() -> dict[str, str]:
    """Fresh values for every secret the backend needs."""
    return {
        "JWT_SECRET_KEY": secrets.token_urlsafe(64),
        "ACTIVATION_SECRET_KEY": secrets.token_urlsafe(64),
        "POSTGRES_PASSWORD": secrets.token_urlsafe(32),
    }


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Reach configuration.

    Generates three required secrets:
    - JWT_SECRET_KEY: Secret for signing session tokens
    - ACTIVATION_SECRET_KEY: Secret for signing account activation tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Reach Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    for name, value in generate_secret_values().items():
        console.print(f"[cyan]{name}[/cyan]={value}", highlight=False)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the Reach API with uvicorn."""
    settings = get_settings()
    bind_host = host or settings.api_host
    bind_port = port or settings.api_port

    console.print(f"[bold green]Starting Reach API[/bold green] on {bind_host}:{bind_port}")
    uvicorn.run(
        "reach_crm.presentation.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
