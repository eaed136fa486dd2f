"""Pure contact and interaction records - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime

from .cadence import is_recognized_cadence, normalize_cadence

CHANNELS = ("Email", "Phone", "Text", "In-Person", "Other")

RELATIONSHIP_TIERS = ("A", "B", "C")


class InvalidRecord(ValueError):
    """Raised when a contact fails validation."""

    pass


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive host-local time. Naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(value: str | date | datetime | None) -> datetime | None:
    """
    Parse a stored timestamp into naive local time.

    Date-only strings ("2025-06-01") become local midnight, never UTC.
    Offset timestamps ("...Z") are converted to the host-local clock so
    they compare with date-only values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_local(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if len(value) == 10:
        return datetime.combine(date.fromisoformat(value), datetime.min.time())
    return to_local(datetime.fromisoformat(value.replace("Z", "+00:00")))


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class Contact:
    """A tracked relationship."""

    id: str
    name: str
    cadence: str
    email: str = ""
    phone: str = ""
    company: str = ""
    title: str = ""
    relationship_strength: int = 5
    notes: str = ""
    how_we_met: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def tier(self) -> str:
        return relationship_tier(self.relationship_strength)

    @classmethod
    def from_dict(cls, data: dict) -> "Contact":
        """Create Contact from a stored record (snake_case or camelCase keys)."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            cadence=data.get("cadence", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            company=data.get("company", ""),
            title=data.get("title", ""),
            relationship_strength=int(
                data.get("relationship_strength", data.get("relationshipStrength", 5))
            ),
            notes=data.get("notes", ""),
            how_we_met=data.get("how_we_met", data.get("howWeMet", "")),
            created_at=parse_timestamp(data.get("created_at", data.get("createdAt"))),
            updated_at=parse_timestamp(data.get("updated_at", data.get("updatedAt"))),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "cadence": self.cadence,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
            "title": self.title,
            "relationship_strength": self.relationship_strength,
            "notes": self.notes,
            "how_we_met": self.how_we_met,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }


@dataclass
class Interaction:
    """A logged touch with a contact."""

    id: str
    contact_id: str
    occurred_at: datetime
    channel: str = "Other"
    notes: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Interaction":
        """
        Create Interaction from a stored record (snake_case or camelCase keys).

        Raises ValueError if the record has no contact id or no date.
        """
        contact_id = data.get("contact_id", data.get("contactId"))
        if contact_id is None:
            raise ValueError(f"Interaction {data.get('id')} has no contact id")
        occurred_at = parse_timestamp(data.get("occurred_at", data.get("date")))
        if occurred_at is None:
            raise ValueError(f"Interaction {data.get('id')} has no date")
        return cls(
            id=str(data["id"]),
            contact_id=str(contact_id),
            occurred_at=occurred_at,
            channel=data.get("channel", "Other"),
            notes=data.get("notes", ""),
            created_at=parse_timestamp(data.get("created_at", data.get("createdAt"))),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "contact_id": self.contact_id,
            "occurred_at": self.occurred_at.isoformat(),
            "channel": self.channel,
            "notes": self.notes,
            "created_at": _isoformat(self.created_at),
        }


def relationship_tier(strength: int) -> str:
    """A (strong) for 8-10, B (medium) for 5-7, C (weak) below that."""
    if strength >= 8:
        return "A"
    if strength >= 5:
        return "B"
    return "C"


@dataclass
class ContactFilter:
    """Search and filter criteria. Empty fields match everything."""

    search: str = ""
    relationship: str = ""
    cadence: str = ""

    def is_empty(self) -> bool:
        return not (self.search or self.relationship or self.cadence)


def _matches_search(contact: Contact, search: str) -> bool:
    needle = search.lower()
    haystack = (contact.name, contact.company, contact.email, contact.notes)
    return any(needle in value.lower() for value in haystack)


def filter_contacts(contacts: list[Contact], contact_filter: ContactFilter) -> list[Contact]:
    """
    Apply search, relationship tier and cadence filters.

    Pure function - no I/O. Cadence comparison goes through alias
    normalization, so "yearly" records match an "annual" filter.
    """
    search = contact_filter.search.strip()
    cadence = normalize_cadence(contact_filter.cadence) if contact_filter.cadence else ""
    tier = contact_filter.relationship.upper()

    result = []
    for c in contacts:
        if search and not _matches_search(c, search):
            continue
        if tier and c.tier != tier:
            continue
        if cadence and normalize_cadence(c.cadence) != cadence:
            continue
        result.append(c)
    return result


def validate_contact(contact: Contact) -> None:
    """Raise InvalidRecord if the contact can't be saved."""
    if not contact.name.strip():
        raise InvalidRecord("Name is required.")
    if not is_recognized_cadence(contact.cadence):
        raise InvalidRecord(f"Unknown cadence: {contact.cadence!r}")
    if not 1 <= contact.relationship_strength <= 10:
        raise InvalidRecord("Relationship strength must be between 1 and 10.")
