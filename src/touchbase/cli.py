"""touchbase CLI - keep in touch on a cadence."""

import json
import logging
import sys
from datetime import datetime

import click

from .adapters.json_store import StoreError
from .config import load_config
from .core.cadence import CADENCES, UnrecognizedCadence, next_touch_date
from .core.contacts import CHANNELS, RELATIONSHIP_TIERS, ContactFilter, InvalidRecord
from .core.dashboard import format_contact_line, format_dashboard
from .core.urgency import annotate_contacts
from .workflows import (
    add_contact,
    build_contact_view,
    build_dashboard,
    contact_history,
    delete_contact,
    delete_interaction,
    edit_contact,
    get_store,
    log_interaction,
)

DATE = click.DateTime(formats=["%Y-%m-%d"])
INSTANT = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"])

now_option = click.option(
    "--now",
    type=INSTANT,
    default=None,
    hidden=True,
    help="Evaluate as of this instant instead of the current time",
)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """touchbase - relationship cadence tracker."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("list")
@click.option("--overdue", "overdue_only", is_flag=True, help="Only overdue contacts")
@click.option("--search", default="", help="Match name, company, email or notes")
@click.option(
    "--relationship",
    type=click.Choice(RELATIONSHIP_TIERS, case_sensitive=False),
    default=None,
    help="Relationship tier (A strong, B medium, C weak)",
)
@click.option("--cadence", default="", help="Only contacts on this cadence")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@now_option
def list_contacts(
    overdue_only: bool,
    search: str,
    relationship: str | None,
    cadence: str,
    as_json: bool,
    now: datetime | None,
):
    """List contacts, most urgent first."""
    config = load_config()
    now = now or datetime.now()
    contact_filter = ContactFilter(search=search, relationship=relationship or "", cadence=cadence)
    try:
        annotated = build_contact_view(config, now, contact_filter, overdue_only)
    except StoreError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in annotated], indent=2))
        return

    if not annotated:
        click.echo("No overdue contacts." if overdue_only else "No contacts found.")
        return

    for a in annotated:
        click.echo(format_contact_line(a, now.date()))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@now_option
def dashboard(as_json: bool, now: datetime | None):
    """Overdue contacts, monthly touches and recent interactions."""
    config = load_config()
    now = now or datetime.now()
    try:
        data = build_dashboard(config, now)
    except StoreError as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "date": data.date.isoformat(),
                    "overdue": [a.to_dict() for a in data.overdue],
                    "overdue_total": data.overdue_total,
                    "touches_this_month": data.touches_this_month,
                    "touches_last_month": data.touches_last_month,
                    "trend": data.trend,
                    "recent": [
                        {
                            "date": r.occurred_at.isoformat(),
                            "contact": r.contact_name,
                            "channel": r.channel,
                        }
                        for r in data.recent
                    ],
                    "never_contacted": [a.id for a in data.never_contacted],
                    "cadence_errors": [a.id for a in data.cadence_errors],
                },
                indent=2,
            )
        )
    else:
        click.echo(format_dashboard(data))


@main.command()
@click.argument("contact_id")
@now_option
def show(contact_id: str, now: datetime | None):
    """Show a contact and its interaction history."""
    config = load_config()
    now = now or datetime.now()
    try:
        contact, interactions = contact_history(config, contact_id)
    except StoreError as e:
        _fail(e)

    annotated = annotate_contacts([contact], interactions, now)[0]
    click.echo(format_contact_line(annotated, now.date()))
    click.echo(f"  Cadence: {contact.cadence}  Relationship: {contact.relationship_strength}/10 ({contact.tier})")
    if annotated.next_touch:
        click.echo(f"  Next touch: {annotated.next_touch.isoformat()}")
    if not interactions:
        click.echo("  No interactions logged.")
        return
    for i in interactions:
        notes = f" - {i.notes}" if i.notes else ""
        click.echo(f"  {i.occurred_at.strftime('%Y-%m-%d')} [{i.id}] {i.channel}{notes}")


@main.command("log")
@click.argument("contact_id")
@click.option("--date", "occurred_on", type=DATE, default=None, help="Date of the interaction (default today)")
@click.option("--channel", type=click.Choice(CHANNELS, case_sensitive=False), default=None)
@click.option("--notes", default="", help="What was discussed")
def log_cmd(contact_id: str, occurred_on: datetime | None, channel: str | None, notes: str):
    """Log an interaction with a contact."""
    config = load_config()
    now = datetime.now()
    occurred_at = occurred_on or datetime.combine(now.date(), datetime.min.time())
    try:
        interaction = log_interaction(config, contact_id, occurred_at, channel, notes, now=now)
    except StoreError as e:
        _fail(e)
    click.echo(f"Logged {interaction.channel} interaction {interaction.id} on {occurred_at.date().isoformat()}.")


@main.command("delete-interaction")
@click.argument("interaction_id")
def delete_interaction_cmd(interaction_id: str):
    """Delete a logged interaction."""
    config = load_config()
    try:
        delete_interaction(config, interaction_id)
    except StoreError as e:
        _fail(e)
    click.echo(f"Deleted interaction {interaction_id}.")


@main.command()
@click.argument("name")
@click.option("--cadence", type=click.Choice(CADENCES), default=None, help="Contact frequency")
@click.option("--company", default="")
@click.option("--email", default="")
@click.option("--phone", default="")
@click.option("--title", default="")
@click.option("--strength", type=int, default=5, help="Relationship strength 1-10")
@click.option("--notes", default="")
@click.option("--how-we-met", default="")
def add(
    name: str,
    cadence: str | None,
    company: str,
    email: str,
    phone: str,
    title: str,
    strength: int,
    notes: str,
    how_we_met: str,
):
    """Add a contact."""
    config = load_config()
    try:
        contact = add_contact(
            config,
            name,
            cadence,
            company=company,
            email=email,
            phone=phone,
            title=title,
            relationship_strength=strength,
            notes=notes,
            how_we_met=how_we_met,
        )
    except (InvalidRecord, StoreError) as e:
        _fail(e)
    click.echo(f"Added {contact.name} [{contact.id}] ({contact.cadence}).")


@main.command()
@click.argument("contact_id")
@click.option("--name", default=None)
@click.option("--cadence", type=click.Choice(CADENCES), default=None, help="Contact frequency")
@click.option("--company", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--title", default=None)
@click.option("--strength", "relationship_strength", type=int, default=None, help="Relationship strength 1-10")
@click.option("--notes", default=None)
@click.option("--how-we-met", default=None)
def edit(contact_id: str, **fields):
    """Edit a contact. Only the given fields change."""
    changes = {k: v for k, v in fields.items() if v is not None}
    if not changes:
        click.echo("Nothing to change.")
        return
    config = load_config()
    try:
        contact = edit_contact(config, contact_id, **changes)
    except (InvalidRecord, StoreError) as e:
        _fail(e)
    click.echo(f"Updated {contact.name} [{contact.id}]: {', '.join(sorted(changes))}.")


@main.command()
@click.argument("contact_id")
@click.confirmation_option(prompt="Delete this contact and all of its interactions?")
def delete(contact_id: str):
    """Delete a contact and its interaction history."""
    config = load_config()
    try:
        delete_contact(config, contact_id)
    except StoreError as e:
        _fail(e)
    click.echo(f"Deleted contact {contact_id}.")


@main.command("next")
@click.argument("anchor", type=DATE)
@click.argument("cadence")
def next_cmd(anchor: datetime, cadence: str):
    """Compute the next touch date from ANCHOR for CADENCE."""
    try:
        due = next_touch_date(anchor, cadence)
    except UnrecognizedCadence as e:
        _fail(e)
    click.echo(due.isoformat())


@main.command()
def seed():
    """Load demo contacts into an empty store."""
    config = load_config()
    try:
        added = get_store(config).seed(datetime.now())
    except StoreError as e:
        _fail(e)
    if added:
        click.echo(f"Seeded {added} contacts into {config.data_file}.")
    else:
        click.echo("Store already has contacts; nothing to seed.")
