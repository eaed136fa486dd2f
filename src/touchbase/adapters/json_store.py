"""File-based record store adapter."""

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path

from touchbase.core.contacts import Contact, Interaction

logger = logging.getLogger(__name__)

# (name, email, phone, company, title, strength, cadence, notes, how_we_met)
SEED_CONTACTS = [
    ("Alice Johnson", "alice.johnson@example.com", "555-123-4567", "Acme Corp", "Product Manager", 8, "monthly", "Met at SaaS conference.", "SaaS conference 2024"),
    ("Bob Smith", "bob.smith@example.com", "555-987-6543", "Beta LLC", "CTO", 6, "quarterly", "Old college friend.", "College"),
    ("Carol Lee", "carol.lee@example.com", "555-222-3333", "Gamma Inc", "Designer", 7, "monthly", "Worked together at Gamma.", "Gamma Inc"),
    ("David Kim", "david.kim@example.com", "555-444-5555", "Delta Partners", "Consultant", 5, "quarterly", "Met at networking event.", "Networking event"),
    ("Eva Green", "eva.green@example.com", "555-666-7777", "Epsilon Ltd", "HR Lead", 9, "monthly", "Family friend.", "Family"),
    ("Frank Moore", "frank.moore@example.com", "555-888-9999", "Zeta Solutions", "Engineer", 4, "yearly", "Met at hackathon.", "Hackathon"),
    ("Grace Lin", "grace.lin@example.com", "555-101-2020", "Eta Group", "Sales Lead", 7, "monthly", "Introduced by Carol.", "Carol Lee"),
    ("Henry Ford", "henry.ford@example.com", "555-303-4040", "Theta Tech", "CEO", 3, "yearly", "Met at investor meeting.", "Investor meeting"),
    ("Ivy Chen", "ivy.chen@example.com", "555-505-6060", "Iota Labs", "Researcher", 6, "quarterly", "Met at research summit.", "Research summit"),
    ("Jack Black", "jack.black@example.com", "555-707-8080", "Kappa Ventures", "Investor", 8, "monthly", "Angel investor.", "Startup pitch"),
]


class StoreError(Exception):
    """Raised when the record file can't be read or a write is rejected."""

    pass


def generate_id() -> str:
    return uuid.uuid4().hex[:8]


def seed_contacts(now: datetime) -> list[Contact]:
    """Demo contacts for a fresh store."""
    return [
        Contact(
            id=str(n),
            name=name,
            email=email,
            phone=phone,
            company=company,
            title=title,
            relationship_strength=strength,
            cadence=cadence,
            notes=notes,
            how_we_met=how_we_met,
            created_at=now,
            updated_at=now,
        )
        for n, (name, email, phone, company, title, strength, cadence, notes, how_we_met) in enumerate(
            SEED_CONTACTS, start=1
        )
    ]


class JsonRecordStore:
    """
    File-based record storage.

    Implements RecordStore protocol. Contacts and interactions live in a
    single JSON document, rewritten on every change.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> dict:
        if not self.path.exists():
            return {"contacts": [], "interactions": []}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt record file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Corrupt record file {self.path}: expected an object, got {type(data).__name__}")
        for key in ("contacts", "interactions"):
            data.setdefault(key, [])
            if not isinstance(data[key], list):
                raise StoreError(f"Corrupt record file {self.path}: {key!r} must be a list")
        return data

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def fetch_contacts(self) -> list[Contact]:
        """Fetch all contacts in insertion order."""
        try:
            return [Contact.from_dict(c) for c in self._load()["contacts"]]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed contact in {self.path}: {e}") from e

    def get_contact(self, contact_id: str) -> Contact | None:
        """Fetch a single contact. Returns None if not found."""
        for c in self.fetch_contacts():
            if c.id == contact_id:
                return c
        return None

    def add_contact(self, contact: Contact) -> None:
        """Insert a new contact."""
        data = self._load()
        if any(c["id"] == contact.id for c in data["contacts"]):
            raise StoreError(f"Contact {contact.id} already exists")
        data["contacts"].append(contact.to_dict())
        self._save(data)

    def update_contact(self, contact: Contact) -> None:
        """Overwrite an existing contact."""
        data = self._load()
        for n, c in enumerate(data["contacts"]):
            if c["id"] == contact.id:
                data["contacts"][n] = contact.to_dict()
                self._save(data)
                return
        raise StoreError(f"No contact with id {contact.id}")

    def delete_contact(self, contact_id: str) -> bool:
        """Delete a contact and its interactions. Returns False if it didn't exist."""
        data = self._load()
        remaining = [c for c in data["contacts"] if str(c["id"]) != contact_id]
        if len(remaining) == len(data["contacts"]):
            return False
        data["contacts"] = remaining
        data["interactions"] = [
            i for i in data["interactions"] if str(i.get("contact_id", i.get("contactId"))) != contact_id
        ]
        self._save(data)
        return True

    def fetch_interactions(self, contact_id: str | None = None) -> list[Interaction]:
        """Fetch interactions, optionally for one contact only."""
        try:
            interactions = [Interaction.from_dict(i) for i in self._load()["interactions"]]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed interaction in {self.path}: {e}") from e
        if contact_id is None:
            return interactions
        return [i for i in interactions if i.contact_id == contact_id]

    def add_interaction(self, interaction: Interaction) -> None:
        """Insert a new interaction and stamp the contact's updated_at."""
        data = self._load()
        for c in data["contacts"]:
            if c["id"] == interaction.contact_id:
                c["updated_at"] = (interaction.created_at or datetime.now()).isoformat()
                break
        else:
            raise StoreError(f"No contact with id {interaction.contact_id}")
        data["interactions"].append(interaction.to_dict())
        self._save(data)

    def delete_interaction(self, interaction_id: str) -> bool:
        """Delete an interaction. Returns False if it didn't exist."""
        data = self._load()
        remaining = [i for i in data["interactions"] if i["id"] != interaction_id]
        if len(remaining) == len(data["interactions"]):
            return False
        data["interactions"] = remaining
        self._save(data)
        return True

    def seed(self, now: datetime) -> int:
        """Load demo contacts into an empty store. Returns number added."""
        data = self._load()
        if data["contacts"]:
            logger.info(f"Store {self.path} already has contacts, skipping seed")
            return 0
        contacts = seed_contacts(now)
        data["contacts"] = [c.to_dict() for c in contacts]
        self._save(data)
        return len(contacts)
