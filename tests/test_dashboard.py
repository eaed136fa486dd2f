"""Tests for core dashboard assembly logic."""

from datetime import date, datetime

import pytest

from touchbase.core.contacts import Contact, Interaction
from touchbase.core.dashboard import (
    DashboardData,
    assemble_dashboard,
    format_contact_line,
    format_dashboard,
    format_trend,
    previous_month,
)
from touchbase.core.urgency import AnnotatedContact


@pytest.fixture
def now():
    return datetime(2025, 7, 15, 10, 0)


@pytest.fixture
def contacts():
    return [
        Contact(id="1", name="Alice", cadence="monthly", company="Acme Corp"),
        Contact(id="2", name="Bob", cadence="quarterly"),
        Contact(id="3", name="Carol", cadence="monthly"),
        Contact(id="4", name="Dave", cadence="annual"),
        Contact(id="5", name="Eve", cadence="weekly"),
    ]


@pytest.fixture
def interactions():
    return [
        Interaction(id="i1", contact_id="1", occurred_at=datetime(2025, 5, 1), channel="Email"),
        Interaction(id="i2", contact_id="2", occurred_at=datetime(2025, 6, 20), channel="Phone"),
        Interaction(id="i3", contact_id="3", occurred_at=datetime(2025, 6, 10), channel="Text"),
        Interaction(id="i4", contact_id="5", occurred_at=datetime(2025, 7, 2), channel="Email"),
        Interaction(id="i5", contact_id="3", occurred_at=datetime(2025, 4, 10), channel="Phone"),
        Interaction(id="i6", contact_id="99", occurred_at=datetime(2025, 7, 5), channel="Other"),
    ]


class TestAssembleDashboard:
    def test_overdue_sorted_by_urgency(self, contacts, interactions, now):
        data = assemble_dashboard(contacts, interactions, now)

        assert [a.name for a in data.overdue] == ["Alice", "Carol"]
        assert data.overdue[0].days_overdue == 45
        assert data.overdue[1].days_overdue == 6
        assert data.overdue_total == 2

    def test_overdue_limit(self, contacts, interactions, now):
        data = assemble_dashboard(contacts, interactions, now, overdue_limit=1)

        assert [a.name for a in data.overdue] == ["Alice"]
        assert data.overdue_total == 2

    def test_monthly_touches(self, contacts, interactions, now):
        data = assemble_dashboard(contacts, interactions, now)

        assert data.touches_this_month == 2
        assert data.touches_last_month == 2
        assert data.trend == 0

    def test_january_compares_with_december(self, contacts):
        interactions = [
            Interaction(id="a", contact_id="1", occurred_at=datetime(2024, 12, 5)),
            Interaction(id="b", contact_id="1", occurred_at=datetime(2025, 1, 3)),
            Interaction(id="c", contact_id="2", occurred_at=datetime(2025, 1, 4)),
            Interaction(id="d", contact_id="2", occurred_at=datetime(2025, 12, 4)),
        ]

        data = assemble_dashboard(contacts, interactions, datetime(2025, 1, 10))

        assert data.touches_this_month == 2
        assert data.touches_last_month == 1
        assert data.trend == 1

    def test_recent_newest_first_with_names(self, contacts, interactions, now):
        data = assemble_dashboard(contacts, interactions, now, recent_limit=3)

        assert [r.contact_name for r in data.recent] == ["Unknown", "Eve", "Bob"]
        assert data.recent[0].occurred_at == datetime(2025, 7, 5)
        assert data.recent[2].channel == "Phone"

    def test_surfaces_never_contacted_and_cadence_errors(self, contacts, interactions, now):
        data = assemble_dashboard(contacts, interactions, now)

        assert [a.name for a in data.never_contacted] == ["Dave"]
        assert [a.name for a in data.cadence_errors] == ["Eve"]

    def test_mixed_date_only_and_zulu_records(self, now):
        contacts = [Contact(id="1", name="Alice", cadence="monthly")]
        interactions = [
            Interaction.from_dict({"id": "i1", "contactId": "1", "date": "2025-07-01"}),
            Interaction.from_dict({"id": "i2", "contactId": "1", "date": "2025-07-10T12:00:00.000Z"}),
        ]

        data = assemble_dashboard(contacts, interactions, now)

        assert data.touches_this_month == 2
        assert [r.occurred_at.tzinfo for r in data.recent] == [None, None]
        assert data.recent[0].occurred_at > data.recent[1].occurred_at

    def test_empty(self, now):
        data = assemble_dashboard([], [], now)

        assert data.date == date(2025, 7, 15)
        assert data.overdue == []
        assert data.recent == []
        assert data.trend == 0


class TestPreviousMonth:
    def test_mid_year(self):
        assert previous_month(2025, 7) == (2025, 6)

    def test_january(self):
        assert previous_month(2025, 1) == (2024, 12)


class TestFormatContactLine:
    def test_overdue(self):
        a = AnnotatedContact(
            contact=Contact(id="1", name="Alice", cadence="monthly", company="Acme Corp"),
            last_interaction=datetime(2025, 5, 1),
            next_touch=date(2025, 6, 1),
            overdue=True,
            days_overdue=45,
        )
        assert format_contact_line(a, date(2025, 7, 15)) == "- Alice (Acme Corp): OVERDUE by 45d"

    def test_upcoming(self):
        a = AnnotatedContact(
            contact=Contact(id="2", name="Bob", cadence="quarterly"),
            last_interaction=datetime(2025, 6, 20),
            next_touch=date(2025, 9, 20),
        )
        assert format_contact_line(a, date(2025, 7, 15)) == "- Bob: due in 67d"

    def test_never_contacted(self):
        a = AnnotatedContact(contact=Contact(id="4", name="Dave", cadence="annual"))
        assert format_contact_line(a, date(2025, 7, 15)) == "- Dave: never contacted"

    def test_cadence_error(self):
        a = AnnotatedContact(
            contact=Contact(id="5", name="Eve", cadence="weekly"),
            last_interaction=datetime(2025, 7, 2),
            cadence_error=True,
        )
        assert format_contact_line(a, date(2025, 7, 15)) == "- Eve: unknown cadence 'weekly'"


class TestFormatDashboard:
    def test_full(self, contacts, interactions, now):
        text = format_dashboard(assemble_dashboard(contacts, interactions, now, overdue_limit=1))

        assert "## Overdue Contacts" in text
        assert "- Alice (45d overdue)" in text
        assert "...and 1 more" in text
        assert "2 (– 0 vs last month)" in text
        assert "- 2025-07-05 Unknown via Other" in text
        assert "## Never Contacted\n- Dave" in text
        assert "## Unknown Cadence\n- Eve: 'weekly'" in text

    def test_nothing_overdue(self, now):
        data = DashboardData(
            date=now.date(),
            overdue=[],
            overdue_total=0,
            touches_this_month=0,
            touches_last_month=0,
            recent=[],
        )

        text = format_dashboard(data)

        assert "No overdue contacts." in text
        assert "No recent interactions." in text
        assert "Never Contacted" not in text

    @pytest.mark.parametrize(
        "trend,expected",
        [(3, "▲ 3 vs last month"), (-2, "▼ 2 vs last month"), (0, "– 0 vs last month")],
    )
    def test_trend(self, trend, expected):
        assert format_trend(trend) == expected
