import pytest
from fastapi.testclient import TestClient #in-process http client, no server needed

from timegrid.main import app
from timegrid.models import DayWindow, SlotKind, TimeSlot, Weekday, parse_time_to_minutes


@pytest.fixture() #test client
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def window():
    return DayWindow.from_times("07:00", "19:00")


def make_slot(slot_id, start, end, day=Weekday.monday, **extra):
    #times as "HH:MM" keep the tests readable
    return TimeSlot(
        id=slot_id,
        start_minutes=parse_time_to_minutes(start),
        end_minutes=parse_time_to_minutes(end),
        day_of_week=day,
        kind=extra.pop("kind", SlotKind.subject),
        **extra,
    )


def make_record(start, end, day="Monday", schedule_id=None, **extra):
    record = {"startTime": start, "endTime": end, "dayOfWeek": day}
    if schedule_id is not None:
        record["scheduleId"] = schedule_id
    record.update(extra)
    return record
