"""
Klaviyo CLI — `klaviyo` command.

Commands:
  klaviyo auth login        Store API keys
  klaviyo profile <cmd>     Identify, fetch and update profiles
  klaviyo lists <cmd>       List membership, subscribe, unsubscribe
"""

import json
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install klaviyo-client[cli]")

from klaviyo_client.client import Klaviyo
from klaviyo_client.config import ClientConfig
from klaviyo_client.errors import ConfigurationError, KlaviyoError

console = Console()
CONFIG_FILE = Path.home() / ".klaviyo" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> Klaviyo:
    """Client from the saved config, falling back to KLAVIYO_* variables."""
    cfg = _load_config()
    overrides = {k: cfg[k] for k in ("public_key", "private_key", "base_url") if cfg.get(k)}
    try:
        config = ClientConfig.from_env(**overrides)
    except ConfigurationError as e:
        _fail(e)
    if not config.public_key and not config.private_key:
        console.print("[red]No API keys configured. Run `klaviyo auth login` first.[/red]")
        raise SystemExit(1)
    return Klaviyo(config=config)


def _fail(err: KlaviyoError) -> None:
    console.print(f"[red]{err.code}: {err.message}[/red]")
    raise SystemExit(1)


def _parse_assignments(pairs: tuple[str, ...]) -> dict:
    """Parse KEY=VALUE pairs; values are JSON when they parse, else strings."""
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--set")
        try:
            result[key] = json.loads(value)
        except json.JSONDecodeError:
            result[key] = value
    return result


@click.group()
@click.version_option("0.1.0")
def main():
    """Klaviyo CLI: profiles and lists from the terminal."""


# Register subcommands from separate modules
from klaviyo_client.cli.auth import auth
from klaviyo_client.cli.profiles import profile
from klaviyo_client.cli.lists import lists

main.add_command(auth)
main.add_command(profile)
main.add_command(lists)


if __name__ == "__main__":
    main()
