"""CLI: klaviyo lists members|subscribe|unsubscribe"""

import json

import click
from rich.console import Console
from rich.table import Table

from klaviyo_client.errors import KlaviyoError
from klaviyo_client.models.profile import Profile

console = Console()


def _get_client():
    from klaviyo_client.cli.main import _get_client
    return _get_client()


def _fail(err: KlaviyoError) -> None:
    from klaviyo_client.cli.main import _fail
    _fail(err)


def _print_members(members, title: str, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps([m.model_dump() for m in members], indent=2))
        return
    table = Table(title=title)
    table.add_column("ID", style="bold")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Created")
    for m in members:
        table.add_row(m.id, m.email, m.phone_number, m.created)
    console.print(table)


@click.group()
def lists():
    """List membership commands."""


@lists.command("members")
@click.argument("list_id")
@click.option("--email", "emails", multiple=True)
@click.option("--phone", "phones", multiple=True)
@click.option("--push-token", "push_tokens", multiple=True)
@click.option("--json-output", "--json", is_flag=True)
def lists_members(list_id, emails, phones, push_tokens, json_output):
    """Check which identifiers belong to a list."""
    with _get_client() as client:
        try:
            members = client.lists.members(list_id, emails, phones, push_tokens)
        except KlaviyoError as e:
            _fail(e)
    _print_members(members, f"Members of {list_id} ({len(members)} found)", json_output)


@lists.command("subscribe")
@click.argument("list_id")
@click.option("--email", "emails", multiple=True)
@click.option("--phone", "phones", multiple=True)
@click.option("--json-output", "--json", is_flag=True)
def lists_subscribe(list_id, emails, phones, json_output):
    """Subscribe emails and phone numbers to a list."""
    profiles = [Profile(email=e) for e in emails] + [Profile(phone_number=p) for p in phones]
    with _get_client() as client:
        try:
            with console.status("Subscribing..."):
                members = client.lists.subscribe(list_id, profiles)
        except KlaviyoError as e:
            _fail(e)
    _print_members(members, f"Subscribed to {list_id}", json_output)


@lists.command("unsubscribe")
@click.argument("list_id")
@click.option("--email", "emails", multiple=True)
@click.option("--phone", "phones", multiple=True)
@click.option("--push-token", "push_tokens", multiple=True)
def lists_unsubscribe(list_id, emails, phones, push_tokens):
    """Unsubscribe identifiers from a list."""
    with _get_client() as client:
        try:
            with console.status("Unsubscribing..."):
                client.lists.unsubscribe(list_id, emails, phones, push_tokens)
        except KlaviyoError as e:
            _fail(e)
    console.print(f"[green]Unsubscribed from {list_id}.[/green]")
