"""Functional core - pure business logic with no I/O."""

from .cadence import CADENCES, UnrecognizedCadence, next_touch_date, normalize_cadence, is_overdue
from .contacts import Contact, Interaction, ContactFilter, InvalidRecord, filter_contacts, validate_contact
from .urgency import AnnotatedContact, annotate_contacts, filter_overdue, sort_by_urgency
from .dashboard import DashboardData, assemble_dashboard, format_dashboard, format_contact_line

__all__ = [
    # Cadence
    "CADENCES",
    "UnrecognizedCadence",
    "next_touch_date",
    "normalize_cadence",
    "is_overdue",
    # Contacts
    "Contact",
    "Interaction",
    "ContactFilter",
    "InvalidRecord",
    "filter_contacts",
    "validate_contact",
    # Urgency
    "AnnotatedContact",
    "annotate_contacts",
    "filter_overdue",
    "sort_by_urgency",
    # Dashboard
    "DashboardData",
    "assemble_dashboard",
    "format_dashboard",
    "format_contact_line",
]
