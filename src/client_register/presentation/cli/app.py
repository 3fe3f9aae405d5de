"""Client Register CLI application using Typer.

Command-line utilities for deployment configuration: signing key
generation and checking passwords against the configured policy.
"""

import secrets

import typer
from rich.console import Console
from rich.markup import escape

from register_auth import InvalidPolicyError, PasswordPolicy, PasswordValidator
from register_config.settings import get_settings

app = typer.Typer(
    name="client-register",
    help="Client Register CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

policy_app = typer.Typer(
    name="policy",
    help="Password policy utilities",
    no_args_is_help=True,
)
app.add_typer(policy_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate the token signing key for the configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Client Register Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]\n"
    )


@policy_app.command("check")
def check_password(
    regex: str = typer.Option(
        None,
        "--regex",
        help="Pattern to check against (defaults to PASSWORD_REGEX)",
    ),
) -> None:
    """Check a password against the password policy.

    The password is read from a hidden prompt and never printed.
    """
    pattern = regex if regex is not None else get_settings().password_regex
    try:
        policy = PasswordPolicy.from_regex(pattern)
    except InvalidPolicyError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=2) from e

    password = typer.prompt("Password", hide_input=True)

    if PasswordValidator(policy).validate(password):
        console.print("[green]Password matches the policy[/green]")
        return

    console.print(f"[red]Password does not match[/red] {escape(policy.regex)}")
    raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
