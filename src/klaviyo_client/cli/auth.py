"""CLI: klaviyo auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from klaviyo_client.config import DEFAULT_BASE_URL, ClientConfig
from klaviyo_client.errors import ConfigurationError

console = Console()


def _load_config() -> dict:
    from klaviyo_client.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from klaviyo_client.cli.main import _save_config
    _save_config(cfg)


def _mask(key: str) -> str:
    return key[:4] + "…" if len(key) > 4 else "…"


@click.group()
def auth():
    """Credential commands."""


@auth.command("login")
@click.option("--base-url", default=None, help="Klaviyo API root")
def auth_login(base_url: Optional[str]):
    """Store the public and private API keys."""
    cfg = _load_config()
    url = base_url or cfg.get("base_url", DEFAULT_BASE_URL)
    public_key = click.prompt("Public key (site id)", default=cfg.get("public_key", ""), show_default=False)
    private_key = click.prompt("Private key", default="", hide_input=True, show_default=False)
    private_key = private_key or cfg.get("private_key", "")

    try:
        ClientConfig(public_key=public_key or None, private_key=private_key or None, base_url=url)
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/red]")
        raise SystemExit(1)

    _save_config({**cfg, "public_key": public_key, "private_key": private_key, "base_url": url})
    console.print("[green]Keys saved to ~/.klaviyo/config.json[/green]")


@auth.command("status")
def auth_status():
    """Show which keys are configured."""
    cfg = _load_config()
    if not cfg.get("public_key") and not cfg.get("private_key"):
        console.print("[yellow]No keys saved. Run `klaviyo auth login`.[/yellow]")
        return
    for name in ("public_key", "private_key"):
        value = cfg.get(name)
        label = name.replace("_", " ").capitalize()
        if value:
            console.print(f"[green]{label}[/green]: {_mask(value)}")
        else:
            console.print(f"[yellow]{label}[/yellow]: not set")
    console.print(f"[dim]API root: {cfg.get('base_url', DEFAULT_BASE_URL)}[/dim]")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    _save_config({})
    console.print("[green]Logged out.[/green]")
