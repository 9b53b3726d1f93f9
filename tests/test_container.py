from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_payroll.hr_payroll.container import build_container, build_kv_store
from src.hr_payroll.hr_payroll.storage.state import HRState


def test_demo_seed_follows_the_injected_clock():
    container = build_container(clock=lambda: datetime(2031, 7, 4, 8, 0), seed_demo=True)
    holidays = container.state_store.snapshot().holidays
    assert [h.date for h in holidays] == [date(2031, 7, 10), date(2031, 7, 25)]


def test_explicit_seed_wins_over_demo_seed():
    container = build_container(seed=HRState(), seed_demo=True)
    assert container.state_store.snapshot().employees == ()


def test_unknown_store_backend_is_rejected():
    with pytest.raises(ValueError):
        build_kv_store(backend="redis")
