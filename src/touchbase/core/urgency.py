"""Pure urgency annotation and ordering - no I/O dependencies."""

import math
from dataclasses import dataclass
from datetime import date, datetime

from .cadence import UnrecognizedCadence, as_instant, due_instant, next_touch_date
from .contacts import Contact, Interaction, to_local

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class AnnotatedContact:
    """A contact plus its computed due date and overdue status."""

    contact: Contact
    last_interaction: datetime | None = None
    next_touch: date | None = None
    overdue: bool = False
    days_overdue: int = 0
    cadence_error: bool = False

    @property
    def id(self) -> str:
        return self.contact.id

    @property
    def name(self) -> str:
        return self.contact.name

    @property
    def cadence(self) -> str:
        return self.contact.cadence

    @property
    def never_contacted(self) -> bool:
        return self.last_interaction is None

    def days_until_touch(self, as_of: date) -> int | None:
        """Days until next touch (negative if past due)."""
        if not self.next_touch:
            return None
        return (self.next_touch - as_of).days

    def to_dict(self) -> dict:
        return {
            **self.contact.to_dict(),
            "last_interaction": self.last_interaction.isoformat() if self.last_interaction else None,
            "next_touch": self.next_touch.isoformat() if self.next_touch else None,
            "overdue": self.overdue,
            "days_overdue": self.days_overdue,
            "cadence_error": self.cadence_error,
        }


def latest_interactions(interactions: list[Interaction]) -> dict[str, datetime]:
    """Most recent interaction timestamp per contact id, in naive local time."""
    latest: dict[str, datetime] = {}
    for i in interactions:
        occurred_at = to_local(i.occurred_at)
        current = latest.get(i.contact_id)
        if current is None or occurred_at > current:
            latest[i.contact_id] = occurred_at
    return latest


def days_past(due: datetime, now: datetime) -> int:
    """Whole days elapsed since due, rounded up, at least 1."""
    elapsed = (now - due).total_seconds() / SECONDS_PER_DAY
    return max(1, math.ceil(elapsed))


def annotate_contact(contact: Contact, last: datetime | None, now: datetime) -> AnnotatedContact:
    """
    Annotate one contact given its latest interaction.

    An unknown cadence is recorded as cadence_error instead of raised.
    """
    if last is None:
        return AnnotatedContact(contact=contact)

    try:
        next_touch = next_touch_date(last, contact.cadence)
    except UnrecognizedCadence:
        return AnnotatedContact(contact=contact, last_interaction=last, cadence_error=True)

    due = due_instant(next_touch, now)
    overdue = due <= now
    return AnnotatedContact(
        contact=contact,
        last_interaction=last,
        next_touch=next_touch,
        overdue=overdue,
        days_overdue=days_past(due, now) if overdue else 0,
    )


def annotate_contacts(
    contacts: list[Contact],
    interactions: list[Interaction],
    now: date | datetime,
) -> list[AnnotatedContact]:
    """
    Join each contact to its latest interaction and compute urgency.

    Pure function - no I/O. Output order matches the input contacts.
    Never raises for a bad cadence on an individual contact.
    """
    now = as_instant(now)
    latest = latest_interactions(interactions)
    return [annotate_contact(c, latest.get(c.id), now) for c in contacts]


def filter_overdue(annotated: list[AnnotatedContact]) -> list[AnnotatedContact]:
    """Filter to overdue contacts only."""
    return [a for a in annotated if a.overdue]


def urgency_key(a: AnnotatedContact) -> tuple[int, int]:
    """
    Sort key, most urgent first.

    Overdue (most days first), then upcoming (soonest first), then
    contacts with no due date at all.
    """
    if a.overdue:
        return (0, -a.days_overdue)
    if a.next_touch:
        return (1, a.next_touch.toordinal())
    return (2, 0)


def sort_by_urgency(annotated: list[AnnotatedContact]) -> list[AnnotatedContact]:
    """
    Order contacts by descending urgency.

    Pure function - no I/O. Stable, so ties keep their input order.
    """
    return sorted(annotated, key=urgency_key)

