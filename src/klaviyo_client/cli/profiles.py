"""CLI: klaviyo profile get|update|identify"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from klaviyo_client.attributes import flatten
from klaviyo_client.errors import KlaviyoError
from klaviyo_client.models.profile import RESERVED_FIELDS, Profile

console = Console()


def _get_client():
    from klaviyo_client.cli.main import _get_client
    return _get_client()


def _fail(err: KlaviyoError) -> None:
    from klaviyo_client.cli.main import _fail
    _fail(err)


def _parse_assignments(pairs):
    from klaviyo_client.cli.main import _parse_assignments
    return _parse_assignments(pairs)


def _print_profile(p: Profile, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps(flatten(p), indent=2, sort_keys=True))
        return
    table = Table(title=f"Profile {p.id or '(new)'}")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for field in RESERVED_FIELDS:
        value = field.get(p)
        if value not in (None, "", []):
            table.add_row(field.wire_key, json.dumps(value) if not isinstance(value, str) else value)
    for key in sorted(p.attributes):
        table.add_row(key, json.dumps(p.attributes[key]))
    console.print(table)


@click.group()
def profile():
    """Profile commands."""


@profile.command("get")
@click.argument("profile_id")
@click.option("--json-output", "--json", is_flag=True)
def profile_get(profile_id, json_output):
    """Fetch a profile by id."""
    with _get_client() as client:
        try:
            p = client.profiles.get(profile_id)
        except KlaviyoError as e:
            _fail(e)
    _print_profile(p, json_output)


@profile.command("update")
@click.argument("profile_id")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE",
              help="Custom attribute to set; repeatable. Values are parsed as JSON when possible.")
@click.option("--json-output", "--json", is_flag=True)
def profile_update(profile_id, assignments, json_output):
    """Set custom attributes on an existing profile."""
    attributes = _parse_assignments(assignments)
    with _get_client() as client:
        try:
            p = client.profiles.get(profile_id)
            p.attributes.update(attributes)
            p = client.profiles.update(p)
        except KlaviyoError as e:
            _fail(e)
    _print_profile(p, json_output)


@profile.command("identify")
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE")
def profile_identify(email: Optional[str], phone: Optional[str], first_name: Optional[str],
                     last_name: Optional[str], assignments):
    """Create or update a profile by email or phone number."""
    p = Profile(
        email=email or "",
        phone_number=phone or "",
        first_name=first_name or "",
        last_name=last_name or "",
        attributes=_parse_assignments(assignments),
    )
    with _get_client() as client:
        try:
            with console.status("Identifying..."):
                client.profiles.identify(p)
        except KlaviyoError as e:
            _fail(e)
    console.print(f"[green]Identified {email or phone}.[/green]")
