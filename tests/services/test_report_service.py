"""
Tests for hotel_reservation/services/report_service.py
Covers: customer_reservations, customer_roster, upcoming_reservations, top_payments,
        customers_with_reservations, rooms_by_type_name, distinct_first_names, summary,
        frequent_customers, latest_payments, payment_descriptions
"""
import pytest
from datetime import date
from decimal import Decimal

from hotel_reservation.models.ontology import (
    Customer, Payment, Reservation, ReservationStatus, Room, RoomType, Service
)
from hotel_reservation.services.report_service import ReportService


# ── helpers ──────────────────────────────────────────────────────────

def _make_customer(db, first="Ada", last="Lovelace", email=None):
    c = Customer(first_name=first, last_name=last, email=email)
    db.add(c)
    db.flush()
    return c


def _make_room(db, room_type, number="101", price=Decimal("100.00")):
    r = Room(room_number=number, room_type_id=room_type.id, price_per_night=price)
    db.add(r)
    db.flush()
    return r


def _make_reservation(db, customer, room, check_in, check_out, status=ReservationStatus.PENDING):
    r = Reservation(
        customer_id=customer.id, room_id=room.id,
        check_in_date=check_in, check_out_date=check_out, status=status
    )
    db.add(r)
    db.flush()
    return r


def _make_payment(db, reservation, amount, method="Cash", paid_on=date(2024, 6, 1)):
    p = Payment(reservation_id=reservation.id, amount=amount, method=method, payment_date=paid_on)
    db.add(p)
    db.flush()
    return p


@pytest.fixture
def room_type(db_session):
    rt = RoomType(type_name="Standard")
    db_session.add(rt)
    db_session.flush()
    return rt


@pytest.fixture
def room(db_session, room_type):
    return _make_room(db_session, room_type)


# ── views ────────────────────────────────────────────────────────────

class TestCustomerReservations:

    def test_one_row_per_reservation_with_full_name(self, db_session, room):
        ada = _make_customer(db_session)
        grace = _make_customer(db_session, "Grace", "Hopper")
        first = _make_reservation(db_session, ada, room, date(2024, 6, 1), date(2024, 6, 3))
        second = _make_reservation(db_session, grace, room, date(2024, 7, 1), date(2024, 7, 2),
                                   ReservationStatus.CONFIRMED)
        db_session.commit()

        rows = ReportService(db_session).customer_reservations()

        assert rows == [
            {
                'reservation_id': first.id,
                'customer_name': "Ada Lovelace",
                'room_id': room.id,
                'check_in_date': date(2024, 6, 1),
                'check_out_date': date(2024, 6, 3),
                'status': ReservationStatus.PENDING,
            },
            {
                'reservation_id': second.id,
                'customer_name': "Grace Hopper",
                'room_id': room.id,
                'check_in_date': date(2024, 7, 1),
                'check_out_date': date(2024, 7, 2),
                'status': ReservationStatus.CONFIRMED,
            },
        ]


class TestCustomerRoster:

    def test_every_customer_once_with_null_email(self, db_session):
        _make_customer(db_session, "Ada", "Lovelace", "ada@x.com")
        _make_customer(db_session, "Grace", "Hopper")
        db_session.commit()

        rows = ReportService(db_session).customer_roster()

        assert rows == [
            {'first_name': "Ada", 'last_name': "Lovelace", 'email': "ada@x.com"},
            {'first_name': "Grace", 'last_name': "Hopper", 'email': None},
        ]

    def test_same_name_customers_not_collapsed(self, db_session):
        _make_customer(db_session, "John", "Smith")
        _make_customer(db_session, "John", "Smith")
        db_session.commit()

        assert len(ReportService(db_session).customer_roster()) == 2

    def test_ordered_by_customer_id(self, db_session):
        _make_customer(db_session, "Zed", "NoMail")
        _make_customer(db_session, "Amy", "Mail", "amy@x.com")
        db_session.commit()

        rows = ReportService(db_session).customer_roster()

        assert [row['first_name'] for row in rows] == ["Zed", "Amy"]


class TestUpcomingReservations:

    def test_empty_without_cancelled_reservations(self, db_session, room):
        ada = _make_customer(db_session)
        _make_reservation(db_session, ada, room, date(2030, 1, 1), date(2030, 1, 5),
                          ReservationStatus.CONFIRMED)
        db_session.commit()

        assert ReportService(db_session).upcoming_reservations() == []

    def test_after_latest_cancelled_checkout(self, db_session, room):
        ada = _make_customer(db_session)
        _make_reservation(db_session, ada, room, date(2024, 5, 1), date(2024, 5, 3),
                          ReservationStatus.CANCELLED)
        cancelled = _make_reservation(db_session, ada, room, date(2024, 6, 1), date(2024, 6, 3),
                                      ReservationStatus.CANCELLED)
        same_day = _make_reservation(db_session, ada, room, date(2024, 6, 3), date(2024, 6, 5))
        later = _make_reservation(db_session, ada, room, date(2024, 7, 1), date(2024, 7, 4))
        db_session.commit()

        upcoming = ReportService(db_session).upcoming_reservations()

        assert [r.id for r in upcoming] == [later.id]
        assert cancelled.id not in [r.id for r in upcoming]
        assert same_day.id not in [r.id for r in upcoming]


# ── subqueries ───────────────────────────────────────────────────────

class TestSubqueryReports:

    def test_top_payments_returns_ties(self, db_session, room):
        reservation = _make_reservation(db_session, _make_customer(db_session), room,
                                        date(2024, 6, 1), date(2024, 6, 3))
        a = _make_payment(db_session, reservation, Decimal("200.00"))
        _make_payment(db_session, reservation, Decimal("50.00"))
        b = _make_payment(db_session, reservation, Decimal("200.00"))
        db_session.commit()

        assert [p.id for p in ReportService(db_session).top_payments()] == [a.id, b.id]

    def test_customers_with_reservations(self, db_session, room):
        booked = _make_customer(db_session, "Ada", "Lovelace")
        _make_customer(db_session, "Grace", "Hopper")
        _make_reservation(db_session, booked, room, date(2024, 6, 1), date(2024, 6, 3))
        _make_reservation(db_session, booked, room, date(2024, 7, 1), date(2024, 7, 3))
        db_session.commit()

        assert [c.id for c in ReportService(db_session).customers_with_reservations()] == [booked.id]

    def test_rooms_by_type_name(self, db_session, room_type, room):
        deluxe = RoomType(type_name="Deluxe")
        db_session.add(deluxe)
        db_session.flush()
        deluxe_room = _make_room(db_session, deluxe, "201")
        db_session.commit()

        service = ReportService(db_session)

        assert [r.id for r in service.rooms_by_type_name("Deluxe")] == [deluxe_room.id]
        assert [r.id for r in service.rooms_by_type_name("Standard")] == [room.id]
        assert service.rooms_by_type_name("Penthouse") == []


# ── aggregates ───────────────────────────────────────────────────────

class TestAggregateReports:

    def test_distinct_first_names(self, db_session):
        _make_customer(db_session, "John", "Smith")
        _make_customer(db_session, "John", "Doe")
        _make_customer(db_session, "Ada", "Lovelace")
        db_session.commit()

        assert ReportService(db_session).distinct_first_names() == ["Ada", "John"]

    def test_summary_on_empty_database(self, db_session):
        summary = ReportService(db_session).summary()

        assert summary['min_room_price'] is None
        assert summary['max_service_price'] is None
        assert summary['avg_payment_amount'] is None
        assert summary['reservation_count'] == 0

    def test_summary(self, db_session, room_type, room):
        _make_room(db_session, room_type, "102", Decimal("80.00"))
        db_session.add_all([
            Service(name="Breakfast", price=Decimal("15.00")),
            Service(name="Spa", price=Decimal("75.00")),
        ])
        reservation = _make_reservation(db_session, _make_customer(db_session), room,
                                        date(2024, 6, 1), date(2024, 6, 3))
        _make_payment(db_session, reservation, Decimal("100.00"))
        _make_payment(db_session, reservation, Decimal("200.00"))
        db_session.commit()

        summary = ReportService(db_session).summary()

        assert summary['min_room_price'] == Decimal("80.00")
        assert summary['max_service_price'] == Decimal("75.00")
        assert float(summary['avg_payment_amount']) == pytest.approx(150.0)
        assert summary['reservation_count'] == 1

    def test_frequent_customers(self, db_session, room):
        regular = _make_customer(db_session, "Ada", "Lovelace")
        once = _make_customer(db_session, "Grace", "Hopper")
        _make_reservation(db_session, regular, room, date(2024, 6, 1), date(2024, 6, 3))
        _make_reservation(db_session, regular, room, date(2024, 7, 1), date(2024, 7, 3))
        _make_reservation(db_session, once, room, date(2024, 8, 1), date(2024, 8, 3))
        db_session.commit()

        service = ReportService(db_session)

        assert service.frequent_customers() == [{'customer_id': regular.id, 'reservation_count': 2}]
        assert len(service.frequent_customers(min_reservations=1)) == 2

    def test_latest_payments(self, db_session, room):
        reservation = _make_reservation(db_session, _make_customer(db_session), room,
                                        date(2024, 6, 1), date(2024, 6, 3))
        payments = [
            _make_payment(db_session, reservation, Decimal("10.00"), paid_on=date(2024, 6, day))
            for day in range(1, 8)
        ]
        db_session.commit()

        latest = ReportService(db_session).latest_payments()

        assert len(latest) == 5
        assert [p.id for p in latest] == [p.id for p in reversed(payments)][:5]

    def test_payment_descriptions(self, db_session, room):
        reservation = _make_reservation(db_session, _make_customer(db_session), room,
                                        date(2024, 6, 1), date(2024, 6, 3))
        _make_payment(db_session, reservation, Decimal("10.00"), "Credit Card")
        _make_payment(db_session, reservation, Decimal("20.00"), "Cash")
        _make_payment(db_session, reservation, Decimal("30.00"), "Bank Transfer")
        _make_payment(db_session, reservation, Decimal("40.00"), None)
        db_session.commit()

        labels = [row['payment_info'] for row in ReportService(db_session).payment_descriptions()]

        assert labels == ["Paid by card", "Paid in cash", "Other method", "Other method"]
