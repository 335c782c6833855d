"""
trendsession CLI - Sign into Google for Trends access from the terminal.

Usage:
    trendsession login          Run the sign-in flow and show the session cookies
    trendsession check          Probe whether a fresh session is signed in
    trendsession config         Show the effective configuration
"""

import logging
from typing import Optional

import requests
import typer
from rich.markup import escape
from pydantic import ValidationError

from trendsession import __version__
from trendsession.config import Settings, load_settings
from trendsession.utils.console import (
    set_headless,
    print_header,
    print_info,
    print_success,
    print_error,
    print_warning,
    print_stats_table,
    print_cookie_table,
    console,
)

app = typer.Typer(
    name="trendsession",
    help="Sign into a Google account and keep the cookies for Google Trends",
    add_completion=False,
    rich_markup_mode="rich",
)


def setup_logging(verbose: bool, headless: bool):
    """Configure logging based on options."""
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if headless:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        from rich.logging import RichHandler

        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_time=verbose,
            show_path=verbose,
            markup=False,
        )
        root_logger.addHandler(handler)
        root_logger.setLevel(level if verbose else logging.WARNING)

    logging.getLogger("trendsession").setLevel(level)

    # Redirect chains are noisy at DEBUG
    for noisy_logger in ['urllib3', 'urllib3.connectionpool', 'requests']:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    set_headless(headless)


def _settings_or_exit(**overrides) -> Settings:
    """Load settings, dropping unset CLI options so env values still apply."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        return load_settings(**overrides)
    except ValidationError as e:
        print_error(f"Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    headless: bool = typer.Option(False, "--headless", "-H", help="Run without fancy output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """trendsession - Google sign-in for Trends."""
    setup_logging(verbose, headless)
    ctx.ensure_object(dict)
    ctx.obj["headless"] = headless
    ctx.obj["verbose"] = verbose


@app.command()
def login(
    ctx: typer.Context,
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Google account email"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password (prompted if not set)"),
    recovery_email: Optional[str] = typer.Option(None, "--recovery-email", "-r", help="Recovery email for verification"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Trends locale, e.g. en_US"),
):
    """Run the sign-in flow and verify the result."""
    from trendsession.auth import GoogleSession

    headless = ctx.obj.get("headless", False)

    print_header("Authentication", "Sign into Google for Trends")

    settings = _settings_or_exit(
        email=email,
        password=password,
        recovery_email=recovery_email,
        language=language,
    )

    if not settings.email:
        print_error("No email configured. Use --email or set TRENDS_EMAIL.")
        raise typer.Exit(1)

    if not settings.password.get_secret_value():
        if headless:
            print_error("No password configured. Use --password or set TRENDS_PASSWORD.")
            raise typer.Exit(1)
        entered = typer.prompt("Password", hide_input=True)
        settings = _settings_or_exit(**{**settings.model_dump(), "password": entered})

    try:
        with GoogleSession(settings) as session:
            print_info(f"Signing in as {settings.email}...")
            session.authenticate()

            if not session.check_auth():
                print_error("Login failed: Google did not accept the session")
                print_info("Check credentials, or set a recovery email for verification")
                raise typer.Exit(1)

            print_success(f"Logged in as: {settings.email}")
            console.print()
            print_cookie_table(session.cookie_jar)

    except requests.RequestException as e:
        print_error(f"Network error: {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def check(ctx: typer.Context):
    """Probe the accounts page with a fresh session."""
    from trendsession.auth import GoogleSession

    settings = _settings_or_exit()

    try:
        with GoogleSession(settings) as session:
            if session.check_auth():
                print_success("Signed in")
            else:
                print_warning("Not signed in")
                print_info("Sessions are not stored between runs; use 'trendsession login'")
    except requests.RequestException as e:
        print_error(f"Network error: {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def config(ctx: typer.Context):
    """Show the effective configuration."""
    settings = _settings_or_exit()

    print_header("Configuration", f"trendsession {__version__}")
    print_stats_table("Settings", {
        "Email": settings.email or "(not set)",
        "Password": "********" if settings.password.get_secret_value() else "(not set)",
        "Recovery email": settings.recovery_email or "(not set)",
        "Language": settings.language,
        "User agent": settings.user_agent,
        "Max sleep interval": f"{settings.max_sleep_interval} (s/100)",
        "Request timeout": f"{settings.request_timeout}s",
        "Max redirects": settings.max_redirects,
    })


if __name__ == "__main__":
    app()
