"""
支付与附加服务目录测试
"""
import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from hotel_reservation.errors import InvalidPaymentAmountError
from hotel_reservation.models.ontology import Payment
from hotel_reservation.models.schemas import (
    PaymentCreate, ReservationServiceCreate, ServiceCreate
)
from hotel_reservation.services.catalog_service import CatalogService
from hotel_reservation.services.payment_service import PaymentService


class TestPaymentService:
    """支付服务"""

    def test_record_payment_defaults_date(self, db_session, sample_reservation):
        payment = PaymentService(db_session).record_payment(PaymentCreate(
            reservation_id=sample_reservation.id, amount=Decimal("200.00"), method="Credit Card"
        ))

        assert payment.id is not None
        assert payment.payment_date == date.today()
        assert payment.amount == Decimal("200.00")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10.00")])
    def test_non_positive_amount_rejected(self, db_session, sample_reservation, amount):
        with pytest.raises(InvalidPaymentAmountError):
            PaymentService(db_session).record_payment(PaymentCreate(
                reservation_id=sample_reservation.id, amount=amount
            ))

        assert db_session.query(Payment).count() == 0

    def test_payment_for_missing_reservation(self, db_session):
        with pytest.raises(IntegrityError):
            PaymentService(db_session).record_payment(PaymentCreate(
                reservation_id=999, amount=Decimal("10.00")
            ))

    def test_list_by_reservation(self, db_session, sample_reservation):
        service = PaymentService(db_session)
        service.record_payment(PaymentCreate(reservation_id=sample_reservation.id, amount=Decimal("10.00")))
        service.record_payment(PaymentCreate(reservation_id=sample_reservation.id, amount=Decimal("20.00")))

        assert len(service.get_payments(sample_reservation.id)) == 2
        assert service.get_payments(999) == []


class TestCatalogService:
    """附加服务目录"""

    def test_create_and_list_services(self, db_session):
        service = CatalogService(db_session)
        service.create_service(ServiceCreate(name="Breakfast", price=Decimal("15.00")))
        service.create_service(ServiceCreate(name="Spa", price=Decimal("75.00")))

        assert [s.name for s in service.get_services()] == ["Breakfast", "Spa"]

    def test_add_service_quantity_defaults_to_one(self, db_session, sample_reservation, sample_service):
        catalog = CatalogService(db_session)

        item = catalog.add_service_to_reservation(
            sample_reservation.id, ReservationServiceCreate(service_id=sample_service.id)
        )

        assert item.quantity == 1
        assert [i.service_id for i in catalog.get_reservation_services(sample_reservation.id)] == [
            sample_service.id
        ]

    def test_duplicate_pair_rejected(self, db_session, sample_reservation, sample_service):
        catalog = CatalogService(db_session)
        catalog.add_service_to_reservation(
            sample_reservation.id, ReservationServiceCreate(service_id=sample_service.id, quantity=2)
        )

        with pytest.raises(IntegrityError):
            catalog.add_service_to_reservation(
                sample_reservation.id, ReservationServiceCreate(service_id=sample_service.id)
            )

        items = catalog.get_reservation_services(sample_reservation.id)
        assert [(i.service_id, i.quantity) for i in items] == [(sample_service.id, 2)]
