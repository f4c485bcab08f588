from datetime import UTC, date, datetime, timedelta
from unittest.mock import Mock
from uuid import uuid4

import pytest

from studio_passes.domain.entities import AttendanceEvent, Pass, ScheduleSlot
from studio_passes.rules.models import IssuanceRules, PassesRules, ProjectRules, StudioRules
from studio_passes.services.passes import PassIssuanceError, PassService

TODAY = date(2025, 6, 16)  # Monday
NOW = datetime(2025, 6, 16, 10, 0, tzinfo=UTC)


def make_pass(start=TODAY, days=28, pass_type="Monthly2Courses", cpw=2, total=8, **kw):
    return Pass(
        owner_id=kw.pop("owner_id", uuid4()),
        start_date=start,
        end_date=start + timedelta(days=days - 1),
        type=pass_type,
        classes_per_week=cpw,
        total_classes=total,
        **kw,
    )


@pytest.fixture
def mock_passes():
    repo = Mock()
    repo.save.side_effect = lambda p: p
    return repo

@pytest.fixture
def mock_attendance():
    source = Mock()
    source.list_by_pass.return_value = []
    return source

@pytest.fixture
def mock_schedules():
    return Mock()

@pytest.fixture
def mock_enrollments():
    return Mock()

@pytest.fixture
def mock_clock():
    clock = Mock()
    clock.now.return_value = NOW
    clock.today.return_value = TODAY
    return clock

@pytest.fixture
def service(mock_passes, mock_attendance, mock_schedules, mock_clock, mock_enrollments):
    return PassService(
        mock_passes, mock_attendance, mock_schedules, mock_clock, enrollments=mock_enrollments
    )


# --- Issuance ---

def test_create_pass_success(service, mock_passes):
    candidate = make_pass()

    result = service.create_pass(candidate)

    assert result == candidate
    mock_passes.save.assert_called_once_with(candidate)

def test_create_pass_rejected(service, mock_passes):
    candidate = make_pass(total=7)

    with pytest.raises(PassIssuanceError) as exc:
        service.create_pass(candidate)

    assert exc.value.codes == ["total_classes_mismatch"]
    assert "8 total classes" in str(exc.value)
    mock_passes.save.assert_not_called()

def test_purchase_pass_enrolls_owner(service, mock_schedules, mock_enrollments, mock_passes):
    monday = ScheduleSlot(day_of_week=1)
    wednesday = ScheduleSlot(day_of_week=3)
    mock_schedules.get_slots.return_value = {monday.id: monday, wednesday.id: wednesday}
    owner = uuid4()

    result = service.purchase_pass(owner, "Monthly2Courses", TODAY, [monday.id, wednesday.id])

    assert result.owner_id == owner
    assert result.total_classes == 8
    assert result.end_date == date(2025, 7, 13)
    mock_passes.save.assert_called_once()
    assert mock_enrollments.enroll.call_count == 2
    mock_enrollments.enroll.assert_any_call(owner, monday.id, TODAY)
    mock_enrollments.enroll.assert_any_call(owner, wednesday.id, TODAY)

def test_purchase_pass_weekday_mismatch(service, mock_schedules, mock_passes, mock_enrollments):
    tuesday = ScheduleSlot(day_of_week=2)
    thursday = ScheduleSlot(day_of_week=4)
    mock_schedules.get_slots.return_value = {tuesday.id: tuesday, thursday.id: thursday}

    with pytest.raises(PassIssuanceError) as exc:
        service.purchase_pass(uuid4(), "Monthly2Courses", TODAY, [tuesday.id, thursday.id])

    assert exc.value.codes == ["start_date_weekday_mismatch"]
    mock_passes.save.assert_not_called()
    mock_enrollments.enroll.assert_not_called()

def test_purchase_pass_combines_selection_and_issuance_errors(service, mock_schedules):
    monday = ScheduleSlot(day_of_week=1)
    mock_schedules.get_slots.return_value = {monday.id: monday}
    week_ago = TODAY - timedelta(days=7)

    with pytest.raises(PassIssuanceError) as exc:
        service.purchase_pass(uuid4(), "Flexi8Classes", week_ago, [monday.id])

    assert exc.value.codes == ["selection_count_mismatch", "start_date_in_past"]

def test_purchase_pass_unknown_schedule(service, mock_schedules):
    mock_schedules.get_slots.return_value = {}

    with pytest.raises(ValueError, match="Schedules not found"):
        service.purchase_pass(uuid4(), "Flexi4Classes", TODAY, [uuid4()])

def test_purchase_full_pass_without_selection(service, mock_schedules, mock_enrollments):
    mock_schedules.get_slots.return_value = {}

    result = service.purchase_pass(uuid4(), "FullPass", TODAY, [])

    assert result.type == "FullPass"
    mock_enrollments.enroll.assert_not_called()

def test_rules_drive_issuance_config(mock_passes, mock_attendance, mock_schedules, mock_clock):
    rules = StudioRules(
        project=ProjectRules(slug="test"),
        issuance=IssuanceRules(validity_days=35, weeks_per_pass=5),
        passes=PassesRules(expiring_window_days=3),
    )
    service = PassService(mock_passes, mock_attendance, mock_schedules, mock_clock, rules=rules)

    assert service.config.validity_days == 35
    assert service.expiring_window_days == 3
    service.create_pass(make_pass(days=35, total=10))


# --- Lifecycle updates ---

def test_update_pass_not_found(service, mock_passes):
    mock_passes.get_by_id.return_value = None

    with pytest.raises(ValueError, match="not found"):
        service.update_pass(uuid4(), is_active=False)

def test_add_classes(service, mock_passes):
    existing = make_pass()
    mock_passes.get_by_id.return_value = existing

    updated = service.update_pass(existing.id, additional_classes=2)

    assert updated.total_classes == 10
    assert updated.updated_at == NOW
    assert updated.start_date == existing.start_date

def test_negative_additional_classes(service, mock_passes):
    mock_passes.get_by_id.return_value = make_pass()

    with pytest.raises(ValueError, match="negative"):
        service.update_pass(uuid4(), additional_classes=-1)

def test_update_end_date_before_start(service, mock_passes):
    existing = make_pass()
    mock_passes.get_by_id.return_value = existing

    with pytest.raises(PassIssuanceError) as exc:
        service.update_pass(existing.id, end_date=existing.start_date)

    assert exc.value.codes == ["invalid_date_range"]
    mock_passes.save.assert_not_called()

def test_update_does_not_recheck_start_in_past(service, mock_passes, mock_clock):
    existing = make_pass()
    mock_passes.get_by_id.return_value = existing
    mock_clock.today.return_value = TODAY + timedelta(days=40)

    updated = service.extend_pass(existing.id, 14)

    assert updated.end_date == existing.end_date + timedelta(days=14)

def test_activate_and_deactivate(service, mock_passes):
    existing = make_pass()
    mock_passes.get_by_id.return_value = existing

    assert service.deactivate_pass(existing.id).is_active is False

    mock_passes.get_by_id.return_value = existing.model_copy(update={"is_active": False})
    assert service.activate_pass(existing.id).is_active is True


# --- Entitlement queries ---

def test_can_use_missing_pass(service, mock_passes):
    mock_passes.get_by_id.return_value = None
    assert service.can_use_pass_for_class(uuid4(), TODAY) is False

def test_can_use_reads_attendance_snapshot(service, mock_passes, mock_attendance):
    pass_ = make_pass(pass_type="Flexi4Classes", cpw=1, total=4)
    mock_passes.get_by_id.return_value = pass_
    mock_attendance.list_by_pass.return_value = [
        AttendanceEvent(class_date=TODAY, was_present=True, pass_id=pass_.id)
    ]

    assert service.can_use_pass_for_class(pass_.id, TODAY + timedelta(days=2)) is False
    assert service.can_use_pass_for_class(pass_.id, TODAY + timedelta(days=7)) is True
    mock_attendance.list_by_pass.assert_called_with(pass_.id)

def test_summary_defaults_to_clock_today(service, mock_passes, mock_clock):
    pass_ = make_pass()
    mock_passes.get_by_id.return_value = pass_
    mock_clock.today.return_value = TODAY - timedelta(days=1)

    summary = service.get_summary(pass_.id)

    assert summary.status == "not_yet_started"
    assert service.get_summary(pass_.id, TODAY).status == "active"

def test_usage_stats(service, mock_passes, mock_attendance):
    pass_ = make_pass()
    mock_passes.get_by_id.return_value = pass_
    mock_attendance.list_by_pass.return_value = [
        AttendanceEvent(class_date=TODAY, was_present=True, pass_id=pass_.id)
    ]

    stats = service.get_usage_stats(pass_.id)

    assert stats.total_classes_attended == 1
    assert len(stats.weekly_breakdown) == 4

def test_get_used_classes_from_date(service, mock_passes, mock_attendance):
    pass_ = make_pass()
    mock_passes.get_by_id.return_value = pass_
    mock_attendance.list_by_pass.return_value = [
        AttendanceEvent(class_date=TODAY + timedelta(days=d), was_present=True, pass_id=pass_.id)
        for d in (0, 2, 7)
    ]

    assert service.get_used_classes(pass_.id) == 3
    assert service.get_used_classes(pass_.id, from_date=TODAY + timedelta(days=1)) == 2
    assert service.get_next_class_number(pass_.id) == 4

def test_get_used_classes_missing_pass(service, mock_passes):
    mock_passes.get_by_id.return_value = None
    assert service.get_used_classes(uuid4()) == 0
    assert service.is_pass_valid_for_date(uuid4(), TODAY) is False


# --- Listings ---

def test_current_active_pass_prefers_latest_start(service, mock_passes):
    owner = uuid4()
    older = make_pass(start=TODAY - timedelta(days=10), owner_id=owner)
    newer = make_pass(start=TODAY - timedelta(days=2), owner_id=owner)
    future = make_pass(start=TODAY + timedelta(days=5), owner_id=owner)
    mock_passes.list_by_owner.return_value = [older, newer, future]

    assert service.get_current_active_pass(owner) == newer

def test_current_active_pass_none(service, mock_passes):
    mock_passes.list_by_owner.return_value = [make_pass(is_active=False)]
    assert service.get_current_active_pass(uuid4()) is None

def test_expired_and_expiring(service, mock_passes):
    long_gone = make_pass(start=TODAY - timedelta(days=60))
    just_ended = make_pass(start=TODAY - timedelta(days=28))
    ends_in_3 = make_pass(start=TODAY - timedelta(days=24))
    ends_in_5 = make_pass(start=TODAY - timedelta(days=22))
    fresh = make_pass()
    mock_passes.list_all.return_value = [long_gone, ends_in_5, fresh, just_ended, ends_in_3]

    assert service.get_expired_passes() == [just_ended, long_gone]
    assert service.get_expiring_passes() == [ends_in_3, ends_in_5]
    assert service.get_expiring_passes(days=4) == [ends_in_3]
    assert service.get_active_passes() == [ends_in_5, fresh, ends_in_3]

def test_passes_by_type(service, mock_passes):
    flexi = make_pass(pass_type="Flexi4Classes", cpw=1, total=4)
    monthly = make_pass()
    mock_passes.list_all.return_value = [flexi, monthly]

    assert service.get_passes_by_type("Flexi4Classes") == [flexi]

def test_purchase_pass_not_saved_when_enrollment_fails(
    service, mock_schedules, mock_enrollments, mock_passes
):
    monday = ScheduleSlot(day_of_week=1)
    mock_schedules.get_slots.return_value = {monday.id: monday}
    mock_enrollments.enroll.side_effect = RuntimeError("enrollment store unavailable")

    with pytest.raises(RuntimeError):
        service.purchase_pass(uuid4(), "Monthly1Course", TODAY, [monday.id])

    mock_passes.save.assert_not_called()

def test_purchase_pass_dedupes_schedule_ids(service, mock_schedules, mock_enrollments):
    monday = ScheduleSlot(day_of_week=1)
    mock_schedules.get_slots.return_value = {monday.id: monday}

    service.purchase_pass(uuid4(), "Monthly1Course", TODAY, [monday.id, monday.id])

    mock_schedules.get_slots.assert_called_once_with([monday.id])
    assert mock_enrollments.enroll.call_count == 1
