from src.campus_attendance.campus_attendance.attendance.factory import AttendanceStrategyFactory
from src.campus_attendance.campus_attendance.attendance.strategies.early_strategy import EarlyStrategy
from src.campus_attendance.campus_attendance.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.campus_attendance.campus_attendance.attendance.strategies.late_strategy import LateStrategy
from src.campus_attendance.campus_attendance.attendance.strategies.normal_strategy import NormalStrategy
from src.campus_attendance.campus_attendance.shifts.model import Shift

SHIFT = Shift(
    shift_id="SH-1",
    label="Morning",
    start_time="08:00",
    end_time="17:00",
    grace_period_minutes=5,
    early_mark_minutes=10,
)


def test_factory_checkin_on_time_within_grace():
    strategy = AttendanceStrategyFactory().for_checkin(diff_minutes=4.98, shift=SHIFT)
    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_grace():
    strategy = AttendanceStrategyFactory().for_checkin(diff_minutes=6, shift=SHIFT)
    assert isinstance(strategy, LateStrategy)


def test_factory_checkin_early_inside_window():
    strategy = AttendanceStrategyFactory().for_checkin(diff_minutes=-10, shift=SHIFT)
    assert isinstance(strategy, EarlyStrategy)


def test_factory_checkin_too_early_is_normal():
    strategy = AttendanceStrategyFactory().for_checkin(diff_minutes=-45, shift=SHIFT)
    assert isinstance(strategy, NormalStrategy)


def test_factory_without_shift_is_normal():
    factory = AttendanceStrategyFactory()
    assert isinstance(factory.for_checkin(diff_minutes=120, shift=None), NormalStrategy)
    assert isinstance(factory.for_checkin(diff_minutes=None, shift=SHIFT), NormalStrategy)


def test_factory_checkout_below_threshold_is_half_day():
    factory = AttendanceStrategyFactory()
    assert isinstance(factory.for_checkout(duration_minutes=200, threshold_minutes=270), HalfDayStrategy)
    assert isinstance(factory.for_checkout(duration_minutes=270, threshold_minutes=270), NormalStrategy)
