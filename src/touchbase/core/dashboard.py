"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .cadence import as_instant
from .contacts import Contact, Interaction, to_local
from .urgency import AnnotatedContact, annotate_contacts, filter_overdue, sort_by_urgency


@dataclass
class RecentTouch:
    """An interaction paired with the contact's display name."""

    occurred_at: datetime
    contact_name: str
    channel: str


@dataclass
class DashboardData:
    """Assembled dashboard data ready for formatting."""

    date: date
    overdue: list[AnnotatedContact]
    overdue_total: int
    touches_this_month: int
    touches_last_month: int
    recent: list[RecentTouch]
    never_contacted: list[AnnotatedContact] = field(default_factory=list)
    cadence_errors: list[AnnotatedContact] = field(default_factory=list)

    @property
    def trend(self) -> int:
        return self.touches_this_month - self.touches_last_month


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def count_touches(interactions: list[Interaction], year: int, month: int) -> int:
    months = (to_local(i.occurred_at) for i in interactions)
    return sum(1 for m in months if m.year == year and m.month == month)


def recent_touches(
    interactions: list[Interaction],
    contacts: list[Contact],
    limit: int = 10,
) -> list[RecentTouch]:
    """Newest interactions first, labelled with the contact name."""
    names = {c.id: c.name for c in contacts}
    newest = sorted(interactions, key=lambda i: to_local(i.occurred_at), reverse=True)[:limit]
    return [
        RecentTouch(
            occurred_at=to_local(i.occurred_at),
            contact_name=names.get(i.contact_id, "Unknown"),
            channel=i.channel,
        )
        for i in newest
    ]


def assemble_dashboard(
    contacts: list[Contact],
    interactions: list[Interaction],
    now: date | datetime,
    overdue_limit: int = 8,
    recent_limit: int = 10,
) -> DashboardData:
    """
    Assemble dashboard data from raw contacts and interactions.

    Pure function - no I/O. Handles annotation, sorting and the monthly
    touch counts.
    """
    now = as_instant(now)
    annotated = annotate_contacts(contacts, interactions, now)
    overdue = sort_by_urgency(filter_overdue(annotated))

    last_year, last_month = previous_month(now.year, now.month)

    return DashboardData(
        date=now.date(),
        overdue=overdue[:overdue_limit],
        overdue_total=len(overdue),
        touches_this_month=count_touches(interactions, now.year, now.month),
        touches_last_month=count_touches(interactions, last_year, last_month),
        recent=recent_touches(interactions, contacts, recent_limit),
        never_contacted=[a for a in annotated if a.never_contacted],
        cadence_errors=[a for a in annotated if a.cadence_error],
    )


def format_contact_line(annotated: AnnotatedContact, as_of: date) -> str:
    """
    Format a single contact's urgency for display.

    Pure function - no I/O.
    """
    if annotated.cadence_error:
        status = f"unknown cadence {annotated.cadence!r}"
    elif annotated.never_contacted:
        status = "never contacted"
    elif annotated.overdue:
        status = f"OVERDUE by {annotated.days_overdue}d"
    else:
        status = f"due in {annotated.days_until_touch(as_of)}d"

    company = f" ({annotated.contact.company})" if annotated.contact.company else ""
    return f"- {annotated.name}{company}: {status}"


def format_trend(trend: int) -> str:
    arrow = "▲" if trend > 0 else "▼" if trend < 0 else "–"
    return f"{arrow} {abs(trend)} vs last month"


def format_dashboard(data: DashboardData) -> str:
    """
    Format dashboard data as plain text.

    Pure function - no I/O.
    """
    lines = ["## Overdue Contacts"]
    if data.overdue:
        lines.extend(f"- {a.name} ({a.days_overdue}d overdue)" for a in data.overdue)
        hidden = data.overdue_total - len(data.overdue)
        if hidden > 0:
            lines.append(f"  ...and {hidden} more")
    else:
        lines.append("No overdue contacts.")

    lines.append("")
    lines.append("## Touches This Month")
    lines.append(f"{data.touches_this_month} ({format_trend(data.trend)})")

    lines.append("")
    lines.append("## Recent Interactions")
    if data.recent:
        lines.extend(
            f"- {r.occurred_at.strftime('%Y-%m-%d')} {r.contact_name} via {r.channel}"
            for r in data.recent
        )
    else:
        lines.append("No recent interactions.")

    if data.never_contacted:
        lines.append("")
        lines.append("## Never Contacted")
        lines.extend(f"- {a.name}" for a in data.never_contacted)

    if data.cadence_errors:
        lines.append("")
        lines.append("## Unknown Cadence")
        lines.extend(f"- {a.name}: {a.cadence!r}" for a in data.cadence_errors)

    return "\n".join(lines)
