"""Shared workflow layer between the CLI and the record store.

Each function loads records through the store, hands them to the pure
core, and returns the result. The caller supplies "now".
"""

import logging
from dataclasses import replace
from datetime import datetime

from .adapters.json_store import JsonRecordStore, StoreError, generate_id
from .config import Config
from .core.contacts import Contact, ContactFilter, Interaction, filter_contacts, validate_contact
from .core.dashboard import DashboardData, assemble_dashboard
from .core.urgency import AnnotatedContact, annotate_contacts, filter_overdue, sort_by_urgency
from .ports.record_store import RecordStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> JsonRecordStore:
    """Resolve the record store from config."""
    return JsonRecordStore(config.data_file)


def build_contact_view(
    config: Config,
    now: datetime,
    contact_filter: ContactFilter | None = None,
    overdue_only: bool = False,
) -> list[AnnotatedContact]:
    """Fetch, filter, annotate and sort contacts for display."""
    store: RecordStore = get_store(config)
    contacts = store.fetch_contacts()
    if contact_filter and not contact_filter.is_empty():
        contacts = filter_contacts(contacts, contact_filter)

    annotated = annotate_contacts(contacts, store.fetch_interactions(), now)
    for a in annotated:
        if a.cadence_error:
            logger.warning(f"Contact {a.id} ({a.name}) has unknown cadence {a.cadence!r}")

    if overdue_only:
        annotated = filter_overdue(annotated)
    return sort_by_urgency(annotated)


def build_dashboard(config: Config, now: datetime) -> DashboardData:
    """Assemble the dashboard from the current store contents."""
    store: RecordStore = get_store(config)
    return assemble_dashboard(
        store.fetch_contacts(),
        store.fetch_interactions(),
        now,
        overdue_limit=config.overdue_limit,
        recent_limit=config.recent_limit,
    )


def log_interaction(
    config: Config,
    contact_id: str,
    occurred_at: datetime,
    channel: str | None = None,
    notes: str = "",
    now: datetime | None = None,
) -> Interaction:
    """Record a touch with a contact."""
    store: RecordStore = get_store(config)
    if store.get_contact(contact_id) is None:
        raise StoreError(f"No contact with id {contact_id}")

    interaction = Interaction(
        id=generate_id(),
        contact_id=contact_id,
        occurred_at=occurred_at,
        channel=channel or config.default_channel,
        notes=notes,
        created_at=now or datetime.now(),
    )
    store.add_interaction(interaction)
    logger.info(f"Logged {interaction.channel} interaction {interaction.id} for contact {contact_id}")
    return interaction


def add_contact(
    config: Config,
    name: str,
    cadence: str | None = None,
    now: datetime | None = None,
    **fields,
) -> Contact:
    """Validate and insert a new contact. Raises InvalidRecord on bad input."""
    now = now or datetime.now()
    contact = Contact(
        id=generate_id(),
        name=name,
        cadence=cadence or config.default_cadence,
        created_at=now,
        updated_at=now,
        **fields,
    )
    validate_contact(contact)
    get_store(config).add_contact(contact)
    logger.info(f"Added contact {contact.id} ({contact.name})")
    return contact


def edit_contact(
    config: Config,
    contact_id: str,
    now: datetime | None = None,
    **changes,
) -> Contact:
    """
    Apply field changes to an existing contact.

    Raises StoreError for an unknown id and InvalidRecord if the edited
    contact fails validation. Nothing is written in either case.
    """
    store: RecordStore = get_store(config)
    contact = store.get_contact(contact_id)
    if contact is None:
        raise StoreError(f"No contact with id {contact_id}")

    edited = replace(contact, **changes, updated_at=now or datetime.now())
    validate_contact(edited)
    store.update_contact(edited)
    logger.info(f"Updated contact {contact_id}: {', '.join(sorted(changes)) or 'no changes'}")
    return edited


def delete_contact(config: Config, contact_id: str) -> None:
    """Remove a contact and every interaction logged against it."""
    if not get_store(config).delete_contact(contact_id):
        raise StoreError(f"No contact with id {contact_id}")
    logger.info(f"Deleted contact {contact_id}")


def contact_history(config: Config, contact_id: str) -> tuple[Contact, list[Interaction]]:
    """A contact and its interactions, newest first."""
    store: RecordStore = get_store(config)
    contact = store.get_contact(contact_id)
    if contact is None:
        raise StoreError(f"No contact with id {contact_id}")
    interactions = sorted(store.fetch_interactions(contact_id), key=lambda i: i.occurred_at, reverse=True)
    return contact, interactions


def delete_interaction(config: Config, interaction_id: str) -> None:
    if not get_store(config).delete_interaction(interaction_id):
        raise StoreError(f"No interaction with id {interaction_id}")
    logger.info(f"Deleted interaction {interaction_id}")
