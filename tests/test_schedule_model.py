# tests/test_schedule_model.py

from conftest import make_event, slot_ids

from itinerary_editor.models.itinerary_models import EventDay, Itinerary
from itinerary_editor.models.session_models import POOL_SLOT, ItineraryMeta
from itinerary_editor.services.schedule_model import ScheduleModel


def _meta(itinerary):
    return ItineraryMeta(
        id=itinerary.id,
        title=itinerary.title,
        start_date=itinerary.start_date,
        end_date=itinerary.end_date,
        chat_session_id=itinerary.chat_session_id,
    )


def test_days_always_have_three_blocks(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    assert [d.date for d in schedule.days] == ["2025-01-01", "2025-01-02"]
    for day in schedule.days:
        assert [b.name for b in day.blocks] == ["Morning", "Afternoon", "Evening"]
    assert slot_ids(schedule, 1, 2) == []


def test_noon_events_fold_into_afternoon():
    day = EventDay.model_validate({
        "date": "2025-01-01",
        "morning_events": [],
        "noon_events": [{"id": 9, "event_name": "Lunch"}],
        "afternoon_events": [{"id": 10, "event_name": "Tour"}],
        "evening_events": [],
    })
    assert [e.id for e in day.afternoon_events] == [9, 10]
    assert "noon_events" not in day.model_dump()


def test_missing_days_are_generated_from_the_date_range():
    itinerary = Itinerary(id=1, start_date="2025-03-01", end_date="2025-03-03")
    schedule = ScheduleModel.from_itinerary(itinerary)
    assert [d.date for d in schedule.days] == ["2025-03-01", "2025-03-02", "2025-03-03"]
    assert all(not b.events for d in schedule.days for b in d.blocks)


def test_insert_is_idempotent_per_slot(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    walk = make_event(77, "Walk")
    assert schedule.insert_into_slot(0, 2, walk)
    assert not schedule.insert_into_slot(0, 2, walk.model_copy())
    assert slot_ids(schedule, 0, 2) == [77]


def test_insert_at_position(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    schedule.insert_into_slot(0, 0, make_event(70, "Coffee"), position=0)
    schedule.insert_into_slot(0, 0, make_event(71, "Run"), position=99)
    assert slot_ids(schedule, 0, 0) == [70, 1, 71]


def test_remove_missing_event_is_a_no_op(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    before = schedule.snapshot_view()
    assert schedule.remove_from_slot(0, 1, 12345) is None
    assert schedule.snapshot_view() == before


def test_find_event_searches_selected_day_then_pool(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    assert schedule.find_event(2).event_name == "Museum"
    assert schedule.find_event(3).event_name == "Concert"
    # Market lives on day two, which is not selected
    assert schedule.find_event(4) is None

    schedule.select_day(1)
    assert schedule.find_event(4).event_name == "Market"
    assert schedule.find_event(2) is None


def test_select_day_rejects_out_of_range(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    assert not schedule.select_day(5)
    assert not schedule.select_day(-1)
    assert schedule.selected_day == 0


def test_clone_shares_nothing(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    copy = schedule.clone()

    copy.remove_from_slot(0, 0, 1)
    copy.unassigned[0].event_name = "Renamed"
    copy.insert_into_slot(1, 2, make_event(88, "Late show"))

    assert slot_ids(schedule, 0, 0) == [1]
    assert schedule.unassigned[0].event_name == "Concert"
    assert slot_ids(schedule, 1, 2) == []


def test_loading_does_not_alias_the_fetched_itinerary(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    schedule.remove_from_slot(0, 0, 1)
    assert [e.id for e in itinerary.event_days[0].morning_events] == [1]


def test_to_itinerary_keeps_identity_and_layout(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    out = schedule.to_itinerary(_meta(itinerary))

    assert (out.id, out.title, out.start_date, out.end_date, out.chat_session_id) == (
        42, "Lisbon, Jan 1 - Jan 2", "2025-01-01", "2025-01-02", 7,
    )
    assert out.event_days == itinerary.event_days
    assert [e.id for e in out.unassigned_events] == [3, 5]


def test_remove_everywhere_and_replace(itinerary):
    schedule = ScheduleModel.from_itinerary(itinerary)
    assert schedule.locate(5) == [(0, POOL_SLOT)]

    updated = make_event(5, "Beach picnic", user_created=True)
    assert schedule.replace_event(updated) == 1
    assert schedule.unassigned[1].event_name == "Beach picnic"

    assert schedule.remove_everywhere(5) == 1
    assert schedule.locate(5) == []
