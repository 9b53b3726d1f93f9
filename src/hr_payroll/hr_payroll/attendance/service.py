from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import Clock, DateLike, at_time, now_local
from ..common.ids import IdFactory, new_id
from ..common.validators import require_choice, require_date, require_non_empty
from ..core.constants import (
    FULL_DAY_MINUTES,
    HALF_DAY_CLOCK_OUT,
    HALF_DAY_MINUTES,
    REGULARIZED_CLOCK_IN,
    REGULARIZED_CLOCK_OUT,
)
from ..core.enums import DayStatus, RequestStatus, WorkDayType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..storage.state import HRState
from ..storage.state_store import StateStore
from .credit import resolve_attendance_credit
from .factory import AttendanceCreditFactory
from .model import AttendanceSession, RegularizationRequest

logger = logging.getLogger(__name__)

DEFAULT_REGULARIZE_COMMENT = "Regularized as full day by HR/Admin."


def worked_minutes_between(clock_in: datetime, clock_out: datetime) -> int:
    return max(round((clock_out - clock_in).total_seconds() / 60), 0)


def _require_attendance_admin(actor: Employee, action: str) -> None:
    if not actor.has_permission("access"):
        raise AuthorizationError(f"You are not allowed to {action}")


class AttendanceService:
    """Use cases: clock in/out, regularization, admin day override, day credit."""

    def __init__(
        self,
        store: StateStore,
        *,
        clock: Clock = now_local,
        id_factory: IdFactory = new_id,
        credit_factory: Optional[AttendanceCreditFactory] = None,
    ):
        self._store = store
        self._clock = clock
        self._new_id = id_factory
        self._credit_factory = credit_factory or AttendanceCreditFactory()

    def clock_in(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or self._clock()

        def command(state: HRState):
            state.require_employee(employee_id)
            if state.open_session(employee_id) is not None:
                raise ValidationError("You are already clocked in")
            session = AttendanceSession(
                session_id=self._new_id("as"),
                employee_id=employee_id,
                work_date=now.date(),
                clock_in=now,
            )
            return state.with_sessions(state.attendance_sessions + (session,)), session

        session = self._store.execute(command)
        logger.info("Employee %s clocked in (session %s)", employee_id, session.session_id)
        return session

    def clock_out(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or self._clock()

        def command(state: HRState):
            active = state.open_session(employee_id)
            if active is None:
                raise ValidationError("You are not clocked in")
            closed = replace(active, clock_out=now, worked_minutes=worked_minutes_between(active.clock_in, now))
            sessions = tuple(closed if s.session_id == active.session_id else s for s in state.attendance_sessions)
            return state.with_sessions(sessions), closed

        closed = self._store.execute(command)

        stored = next(
            (s for s in self._store.snapshot().attendance_sessions if s.session_id == closed.session_id),
            None,
        )
        if stored is None or stored.is_open:
            raise ValidationError(f"Session {closed.session_id} could not be closed")

        logger.info(
            "Employee %s clocked out (session %s, %s min)", employee_id, closed.session_id, closed.worked_minutes
        )
        return closed

    def submit_regularization(
        self,
        *,
        employee_id: str,
        work_date: DateLike,
        reason: str,
        recipient_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> RegularizationRequest:
        day = require_date(work_date, "Date")
        reason = require_non_empty(reason, "Reason")
        now = now or self._clock()

        def command(state: HRState):
            state.require_employee(employee_id)
            duplicate = any(
                r.employee_id == employee_id and r.work_date == day and r.status == RequestStatus.PENDING
                for r in state.regularization_requests
            )
            if duplicate:
                raise ValidationError("Pending request already exists for this date")

            recipient = state.find_employee(recipient_id) if recipient_id else state.first_admin()
            request = RegularizationRequest(
                request_id=self._new_id("rr"),
                employee_id=employee_id,
                work_date=day,
                reason=reason,
                recipient_id=recipient.employee_id if recipient else None,
                status=RequestStatus.PENDING,
                created_at=now,
            )
            return state.with_regularization(request), request

        request = self._store.execute(command)
        logger.info("Regularization %s requested by %s for %s", request.request_id, employee_id, day)
        return request

    def regularize(
        self,
        *,
        actor_id: str,
        employee_id: str,
        work_date: DateLike,
        request_id: Optional[str] = None,
        comment: str = "",
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        """Mark a date as a full office day (09:00-18:00, at least 540 minutes)."""
        day = require_date(work_date, "Date")
        now = now or self._clock()

        def command(state: HRState):
            _require_attendance_admin(state.require_employee(actor_id), "regularize attendance")
            state.require_employee(employee_id)

            clock_in = at_time(day, REGULARIZED_CLOCK_IN)
            clock_out = at_time(day, REGULARIZED_CLOCK_OUT)
            existing = next(iter(state.sessions_for(employee_id, day)), None)
            if existing is not None:
                session = replace(
                    existing,
                    clock_out=clock_out,
                    worked_minutes=max(existing.worked_minutes, FULL_DAY_MINUTES),
                )
                sessions = tuple(
                    session if s.session_id == existing.session_id else s for s in state.attendance_sessions
                )
            else:
                session = AttendanceSession(
                    session_id=self._new_id("as"),
                    employee_id=employee_id,
                    work_date=day,
                    clock_in=clock_in,
                    clock_out=clock_out,
                    worked_minutes=FULL_DAY_MINUTES,
                )
                sessions = state.attendance_sessions + (session,)

            next_state = state.with_sessions(sessions)
            if request_id:
                request = state.find_regularization(request_id)
                if request is None:
                    raise NotFoundError(f"Regularization request {request_id} not found")
                if request.employee_id != employee_id or request.work_date != day:
                    raise ValidationError(f"Regularization request {request_id} is for a different employee or date")
                next_state = next_state.with_regularization(
                    replace(
                        request,
                        status=RequestStatus.APPROVED,
                        reviewed_by=actor_id,
                        review_comment=comment or DEFAULT_REGULARIZE_COMMENT,
                        reviewed_at=now,
                    )
                )
            return next_state, session

        session = self._store.execute(command)
        logger.info("Attendance of %s on %s regularized by %s", employee_id, day, actor_id)
        return session

    def admin_set_day(
        self,
        *,
        actor_id: str,
        employee_id: str,
        work_date: DateLike,
        status: DayStatus | str,
        work_day_type: WorkDayType | str = WorkDayType.NO_SESSION,
    ) -> Optional[AttendanceSession]:
        """Replace every session of one date with a synthetic Full Day / Half Day session, or none."""
        day = require_date(work_date, "Date")
        status = require_choice(DayStatus, status, "Attendance status")
        work_day_type = require_choice(WorkDayType, work_day_type or WorkDayType.NO_SESSION, "Work day type")

        def command(state: HRState):
            _require_attendance_admin(state.require_employee(actor_id), "edit attendance")
            state.require_employee(employee_id)

            kept = tuple(
                s for s in state.attendance_sessions if not (s.employee_id == employee_id and s.work_date == day)
            )
            session = None
            if status != DayStatus.ABSENT and work_day_type != WorkDayType.NO_SESSION:
                half = work_day_type == WorkDayType.HALF_DAY
                session = AttendanceSession(
                    session_id=self._new_id("as"),
                    employee_id=employee_id,
                    work_date=day,
                    clock_in=at_time(day, REGULARIZED_CLOCK_IN),
                    clock_out=at_time(day, HALF_DAY_CLOCK_OUT if half else REGULARIZED_CLOCK_OUT),
                    worked_minutes=HALF_DAY_MINUTES if half else FULL_DAY_MINUTES,
                )
                kept = kept + (session,)
            return state.with_sessions(kept), session

        session = self._store.execute(command)
        logger.info(
            "Attendance of %s on %s set to %s (%s) by %s",
            employee_id,
            day,
            status.value,
            work_day_type.value,
            actor_id,
        )
        return session

    def credit_for(self, employee_id: str, work_date: DateLike) -> float:
        day: date = require_date(work_date, "Date")
        state = self._store.snapshot()
        state.require_employee(employee_id)
        return resolve_attendance_credit(
            employee_id,
            day,
            state.sessions_for(employee_id),
            state.leaves_for(employee_id),
            factory=self._credit_factory,
        )

    def list_regularizations(
        self,
        *,
        actor_id: str,
        recipient_id: Optional[str] = None,
        status: Optional[RequestStatus | str] = None,
    ) -> list[RegularizationRequest]:
        """Review queue for HR; filters are optional and combine."""
        status = require_choice(RequestStatus, status, "Status") if status else None
        recipient_id = recipient_id or None
        state = self._store.snapshot()
        _require_attendance_admin(state.require_employee(actor_id), "view regularization requests")
        return [
            r
            for r in state.regularization_requests
            if (recipient_id is None or r.recipient_id == recipient_id) and (status is None or r.status == status)
        ]
