"""
预订服务测试
覆盖：创建（含批量）、预订日志钩子、状态更新与房间可用状态、删除、按客人查询
"""
import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from hotel_reservation.errors import EntityNotFoundError, InvalidStayDatesError
from hotel_reservation.models.ontology import (
    Payment, Reservation, ReservationLog, ReservationStatus, Room
)
from hotel_reservation.models.schemas import ReservationCreate
from hotel_reservation.services.hooks import HookType, TransactionHooks
from hotel_reservation.services.reservation_hooks import NEW_RESERVATION_ACTION
from hotel_reservation.services.reservation_service import ReservationService


def _booking(customer_id, room_id, check_in=date(2024, 6, 1), check_out=date(2024, 6, 3)):
    return ReservationCreate(
        customer_id=customer_id,
        room_id=room_id,
        check_in_date=check_in,
        check_out_date=check_out
    )


class TestCreateReservation:
    """创建预订"""

    def test_create_starts_pending(self, db_session, hooks, sample_customer, sample_room):
        service = ReservationService(db_session, hooks)

        reservation = service.create_reservation(_booking(sample_customer.id, sample_room.id))

        assert reservation.id is not None
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.reservation_date == date.today()

    def test_create_writes_one_log_row(self, db_session, hooks, sample_customer, sample_room):
        """每条新预订对应一条日志"""
        service = ReservationService(db_session, hooks)

        reservation = service.create_reservation(_booking(sample_customer.id, sample_room.id))

        logs = db_session.query(ReservationLog).all()
        assert len(logs) == 1
        assert logs[0].reservation_id == reservation.id
        assert logs[0].action == NEW_RESERVATION_ACTION
        assert logs[0].log_date is not None

    def test_batch_create_logs_every_row(self, db_session, hooks, sample_customer, sample_room, sample_room_2):
        service = ReservationService(db_session, hooks)

        reservations = service.create_reservations([
            _booking(sample_customer.id, sample_room.id),
            _booking(sample_customer.id, sample_room_2.id),
            _booking(sample_customer.id, sample_room.id, date(2024, 7, 1), date(2024, 7, 5)),
        ])

        logged_ids = sorted(log.reservation_id for log in service.get_logs())
        assert logged_ids == sorted(r.id for r in reservations)

    def test_missing_customer_inserts_nothing(self, db_session, hooks, sample_room):
        """客人不存在时违反外键，不写入任何行"""
        service = ReservationService(db_session, hooks)

        with pytest.raises(IntegrityError):
            service.create_reservation(_booking(999, sample_room.id))

        assert db_session.query(Reservation).count() == 0
        assert db_session.query(ReservationLog).count() == 0

    def test_batch_with_one_bad_row_is_all_or_nothing(self, db_session, hooks, sample_customer, sample_room):
        service = ReservationService(db_session, hooks)

        with pytest.raises(IntegrityError):
            service.create_reservations([
                _booking(sample_customer.id, sample_room.id),
                _booking(sample_customer.id, 999),
            ])

        assert db_session.query(Reservation).count() == 0
        assert db_session.query(ReservationLog).count() == 0

    def test_check_out_must_follow_check_in(self, db_session, hooks, sample_customer, sample_room):
        service = ReservationService(db_session, hooks)

        with pytest.raises(InvalidStayDatesError):
            service.create_reservation(
                _booking(sample_customer.id, sample_room.id, date(2024, 6, 3), date(2024, 6, 3))
            )

        assert db_session.query(Reservation).count() == 0

    def test_hook_failure_rolls_back_insert(self, db_session, sample_customer, sample_room):
        """钩子失败时预订本身也回滚"""
        def failing(db, rows):
            raise RuntimeError("audit log unavailable")

        registry = TransactionHooks()
        registry.register(HookType.RESERVATION_INSERTED, failing)
        service = ReservationService(db_session, registry)

        with pytest.raises(RuntimeError):
            service.create_reservation(_booking(sample_customer.id, sample_room.id))

        assert db_session.query(Reservation).count() == 0


class TestUpdateReservationStatus:
    """状态更新与房间可用状态"""

    def test_confirm_marks_room_unavailable(self, db_session, hooks, sample_reservation, sample_room):
        service = ReservationService(db_session, hooks)

        reservation = service.update_reservation_status(sample_reservation.id, ReservationStatus.CONFIRMED)

        assert reservation.status == ReservationStatus.CONFIRMED
        db_session.refresh(sample_room)
        assert sample_room.is_available is False

    @pytest.mark.parametrize("status", [
        ReservationStatus.PENDING, ReservationStatus.CANCELLED, ReservationStatus.COMPLETED
    ])
    def test_other_statuses_leave_availability(self, db_session, hooks, sample_reservation, sample_room, status):
        service = ReservationService(db_session, hooks)

        service.update_reservation_status(sample_reservation.id, status)

        db_session.refresh(sample_room)
        assert sample_room.is_available is True

    def test_cancel_after_confirm_keeps_room_unavailable(self, db_session, hooks, sample_reservation, sample_room):
        """默认行为：取消不会恢复房间可用状态"""
        service = ReservationService(db_session, hooks)

        service.update_reservation_status(sample_reservation.id, ReservationStatus.CONFIRMED)
        service.update_reservation_status(sample_reservation.id, ReservationStatus.CANCELLED)

        db_session.refresh(sample_room)
        assert sample_room.is_available is False

    def test_cancel_after_confirm_restores_when_enabled(self, db_session, restoring_hooks,
                                                        sample_reservation, sample_room):
        service = ReservationService(db_session, restoring_hooks)

        service.update_reservation_status(sample_reservation.id, ReservationStatus.CONFIRMED)
        service.update_reservation_status(sample_reservation.id, ReservationStatus.CANCELLED)

        db_session.refresh(sample_room)
        assert sample_room.is_available is True

    def test_batch_confirm_marks_every_room(self, db_session, hooks, sample_customer, sample_room, sample_room_2):
        service = ReservationService(db_session, hooks)
        first, second = service.create_reservations([
            _booking(sample_customer.id, sample_room.id),
            _booking(sample_customer.id, sample_room_2.id),
        ])

        service.update_reservation_statuses([first.id, second.id], ReservationStatus.CONFIRMED)

        assert [room.is_available for room in db_session.query(Room).order_by(Room.id)] == [False, False]

    def test_missing_reservation(self, db_session, hooks):
        service = ReservationService(db_session, hooks)

        with pytest.raises(EntityNotFoundError):
            service.update_reservation_status(999, ReservationStatus.CONFIRMED)

    def test_batch_with_missing_id_changes_nothing(self, db_session, hooks, sample_reservation, sample_room):
        service = ReservationService(db_session, hooks)

        with pytest.raises(EntityNotFoundError):
            service.update_reservation_statuses([sample_reservation.id, 999], ReservationStatus.CONFIRMED)

        reservation = db_session.get(Reservation, sample_reservation.id)
        assert reservation.status == ReservationStatus.PENDING
        assert db_session.get(Room, sample_room.id).is_available is True


class TestDeleteReservation:
    """删除预订"""

    def test_delete_missing_is_noop(self, db_session, hooks):
        assert ReservationService(db_session, hooks).delete_reservation(999) == 0

    def test_delete_keeps_log_and_availability(self, db_session, hooks, sample_customer, sample_room):
        service = ReservationService(db_session, hooks)
        reservation = service.create_reservation(_booking(sample_customer.id, sample_room.id))
        service.update_reservation_status(reservation.id, ReservationStatus.CONFIRMED)
        reservation_id = reservation.id

        assert service.delete_reservation(reservation_id) == 1

        assert service.get_reservation(reservation_id) is None
        assert [log.reservation_id for log in service.get_logs()] == [reservation_id]
        db_session.refresh(sample_room)
        assert sample_room.is_available is False

    def test_delete_restores_availability_when_enabled(self, db_session, restoring_hooks,
                                                       sample_reservation, sample_room):
        service = ReservationService(db_session, restoring_hooks)
        service.update_reservation_status(sample_reservation.id, ReservationStatus.CONFIRMED)

        service.delete_reservation(sample_reservation.id)

        db_session.refresh(sample_room)
        assert sample_room.is_available is True

    def test_delete_with_payment_is_rejected(self, db_session, hooks, sample_reservation):
        """仍有支付记录引用时由外键拒绝"""
        db_session.add(Payment(reservation_id=sample_reservation.id, amount=Decimal("50.00"), method="Cash"))
        db_session.commit()
        service = ReservationService(db_session, hooks)

        with pytest.raises(IntegrityError):
            service.delete_reservation(sample_reservation.id)

        assert service.get_reservation(sample_reservation.id) is not None


class TestListByCustomer:
    """按客人查询预订"""

    def test_rows_in_insertion_order(self, db_session, hooks, sample_customer, sample_room, sample_room_2):
        service = ReservationService(db_session, hooks)
        first = service.create_reservation(
            _booking(sample_customer.id, sample_room_2.id, date(2024, 8, 1), date(2024, 8, 2))
        )
        second = service.create_reservation(_booking(sample_customer.id, sample_room.id))

        rows = service.list_by_customer(sample_customer.id)

        assert [row['reservation_id'] for row in rows] == [first.id, second.id]
        assert rows[0] == {
            'reservation_id': first.id,
            'room_id': sample_room_2.id,
            'check_in_date': date(2024, 8, 1),
            'check_out_date': date(2024, 8, 2),
            'status': ReservationStatus.PENDING,
        }

    def test_unknown_customer_returns_empty(self, db_session, hooks):
        assert ReservationService(db_session, hooks).list_by_customer(999) == []
