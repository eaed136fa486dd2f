"""Record store interface."""

from typing import Protocol

from touchbase.core.contacts import Contact, Interaction


class RecordStore(Protocol):
    """Interface for reading and writing contacts and interactions."""

    def fetch_contacts(self) -> list[Contact]:
        """Fetch all contacts in insertion order."""
        ...

    def get_contact(self, contact_id: str) -> Contact | None:
        """Fetch a single contact. Returns None if not found."""
        ...

    def add_contact(self, contact: Contact) -> None:
        """Insert a new contact."""
        ...

    def update_contact(self, contact: Contact) -> None:
        """Overwrite an existing contact."""
        ...

    def delete_contact(self, contact_id: str) -> bool:
        """Delete a contact and its interactions. Returns False if it didn't exist."""
        ...

    def fetch_interactions(self, contact_id: str | None = None) -> list[Interaction]:
        """Fetch interactions, optionally for one contact only."""
        ...

    def add_interaction(self, interaction: Interaction) -> None:
        """Insert a new interaction."""
        ...

    def delete_interaction(self, interaction_id: str) -> bool:
        """Delete an interaction. Returns False if it didn't exist."""
        ...
