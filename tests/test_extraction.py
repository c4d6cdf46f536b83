import pytest

from conftest import make_meeting
from meeting_agent.core.agent.extraction import (
    RESTATE_DATETIME_TEXT,
    RESTATE_TEXT,
    Complete,
    Incomplete,
    SlotFiller,
    find_json_object,
    parse_json_object,
)
from meeting_agent.core.agent.intents import Intent

HISTORY = [
    {"role": "user", "content": "Schedule a meeting"},
    {"role": "assistant", "content": "Sure, what should I call it?"},
]


def test_find_json_object_picks_largest_balanced_span():
    text = 'First {"a": 1} then {"b": {"c": 2}, "d": [1, 2]} done'
    assert find_json_object(text) == '{"b": {"c": 2}, "d": [1, 2]}'


def test_find_json_object_ignores_braces_inside_strings():
    text = 'Here: {"title": "Plan {Q3}", "notes": "use \\"}\\" carefully"}'
    assert parse_json_object(text) == {"title": "Plan {Q3}", "notes": 'use "}" carefully'}


def test_find_json_object_none_without_braces():
    assert find_json_object("When would you like to meet?") is None
    assert find_json_object("unbalanced { here") is None


def test_find_json_object_skips_unclosed_brace_before_object():
    text = 'Use the {title placeholder. Here you go: {"query": "sync"}'
    assert find_json_object(text) == '{"query": "sync"}'
    assert parse_json_object(text) == {"query": "sync"}


def test_parse_json_object_falls_back_to_smaller_valid_span():
    text = '{not json but {"query": "sync"} inside}'
    assert parse_json_object(text) == {"query": "sync"}


def test_parse_json_object_rejects_malformed_json():
    assert parse_json_object("{title: Standup, when: tomorrow}") is None


@pytest.mark.asyncio
async def test_schedule_complete_from_json_inside_prose(llm, provider):
    provider.queue(
        'Great, here are the details:\n```json\n{"action": "create", "title": "Standup", '
        '"datetime": "2025-01-06T09:00:00+05:30", "duration_minutes": 15, "notes": "daily"}\n```'
    )
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Standup tomorrow at 9 for 15 minutes", HISTORY, [])

    assert isinstance(result, Complete)
    assert result.action == "create"
    assert result.fields["title"] == "Standup"
    assert result.fields["datetime"] == "2025-01-06T09:00:00+05:30"
    assert result.fields["duration_minutes"] == 15
    assert result.fields["notes"] == "daily"


@pytest.mark.asyncio
async def test_schedule_prompt_embeds_history_and_input(llm, provider):
    provider.queue("What time works for you?")
    await SlotFiller(llm).extract(Intent.SCHEDULE, "call it Standup", HISTORY, [])

    prompt, context = provider.calls[0]
    assert "user: Schedule a meeting" in prompt
    assert "assistant: Sure, what should I call it?" in prompt
    assert "Current input: call it Standup" in prompt
    assert context == []


@pytest.mark.asyncio
async def test_schedule_without_json_is_incomplete(llm, provider):
    provider.queue("What time should the meeting start?")
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Schedule a meeting", [], [])
    assert result == Incomplete(follow_up="What time should the meeting start?")


@pytest.mark.asyncio
async def test_schedule_missing_duration_is_incomplete(llm, provider):
    reply = 'Almost there {"title": "Standup", "datetime": "2025-01-06T09:00:00+05:30"} - how long?'
    provider.queue(reply)
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Standup at 9", [], [])
    assert isinstance(result, Incomplete)
    assert result.follow_up == reply


@pytest.mark.asyncio
async def test_schedule_blank_title_is_incomplete(llm, provider):
    provider.queue('{"title": "  ", "datetime": "2025-01-06T09:00:00+05:30", "duration_minutes": 30}')
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "meeting at 9", [], [])
    assert isinstance(result, Incomplete)


@pytest.mark.asyncio
async def test_schedule_unparseable_datetime_asks_to_restate(llm, provider):
    provider.queue('{"title": "Standup", "datetime": "tomorrow morning", "duration_minutes": 15}')
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Standup tomorrow morning", [], [])
    assert result == Incomplete(follow_up=RESTATE_TEXT)


@pytest.mark.asyncio
async def test_schedule_non_positive_duration_asks_to_restate(llm, provider):
    provider.queue('{"title": "Standup", "datetime": "2025-01-06T09:00:00+05:30", "duration_minutes": 0}')
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Standup", [], [])
    assert result == Incomplete(follow_up=RESTATE_TEXT)


@pytest.mark.asyncio
async def test_schedule_out_of_range_window_asks_to_restate(llm, provider):
    provider.queue('{"title": "Far", "datetime": "9999-12-31T23:00:00-05:00", "duration_minutes": 15}')
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Far", [], [])
    assert result == Incomplete(follow_up=RESTATE_TEXT)


@pytest.mark.asyncio
async def test_schedule_normalizes_naive_datetime_and_string_duration(llm, provider):
    provider.queue('{"title": "Standup", "datetime": "2025-01-06T09:00:00", "duration_minutes": "30"}')
    result = await SlotFiller(llm).extract(Intent.SCHEDULE, "Standup", [], [])
    assert isinstance(result, Complete)
    assert result.fields["datetime"] == "2025-01-06T09:00:00+05:30"
    assert result.fields["duration_minutes"] == 30


@pytest.mark.asyncio
async def test_reschedule_prompt_includes_current_meetings(llm, provider):
    meetings = [make_meeting("Team Sync", "2025-01-06T09:00:00+05:30", 30, id="m-1")]
    provider.queue('{"action": "update", "meetingId": "Team Sync", "newDatetime": "2025-01-06T11:00:00+05:30"}')
    result = await SlotFiller(llm).extract(Intent.RESCHEDULE, "move team sync to 11", [], meetings)

    prompt, _ = provider.calls[0]
    assert '"id": "m-1"' in prompt
    assert '"title": "Team Sync"' in prompt
    assert result == Complete(
        action="update",
        fields={"meetingId": "Team Sync", "newDatetime": "2025-01-06T11:00:00+05:30"},
    )


@pytest.mark.asyncio
async def test_reschedule_bad_datetime_is_incomplete(llm, provider):
    provider.queue('{"meetingId": "m-1", "newDatetime": "later"}')
    result = await SlotFiller(llm).extract(Intent.RESCHEDULE, "delay it", [], [])
    assert result == Incomplete(follow_up=RESTATE_DATETIME_TEXT)


@pytest.mark.asyncio
async def test_reschedule_out_of_range_datetime_is_incomplete(llm, provider):
    provider.queue('{"meetingId": "m-1", "newDatetime": "9999-12-31T23:00:00-05:00"}')
    result = await SlotFiller(llm).extract(Intent.RESCHEDULE, "move it", [], [])
    assert result == Incomplete(follow_up=RESTATE_DATETIME_TEXT)


@pytest.mark.asyncio
async def test_delete_and_search_complete(llm, provider):
    provider.queue('{"action": "delete", "meetingId": "budget"}', '{"action": "search", "query": "sync"}')
    filler = SlotFiller(llm)

    deleted = await filler.extract(Intent.DELETE, "cancel budget", [], [])
    found = await filler.extract(Intent.SEARCH, "find sync", [], [])

    assert deleted == Complete(action="delete", fields={"meetingId": "budget"})
    assert found == Complete(action="search", fields={"query": "sync"})


@pytest.mark.asyncio
async def test_search_complete_after_stray_open_brace(llm, provider):
    provider.queue('Sure { I will search. {"action": "search", "query": "sync"}')
    result = await SlotFiller(llm).extract(Intent.SEARCH, "find sync", [], [])
    assert result == Complete(action="search", fields={"query": "sync"})


@pytest.mark.asyncio
async def test_malformed_json_reply_is_incomplete(llm, provider):
    reply = "Which meeting? {meetingId: budget"
    provider.queue(reply)
    result = await SlotFiller(llm).extract(Intent.DELETE, "cancel it", [], [])
    assert result == Incomplete(follow_up=reply)


@pytest.mark.asyncio
async def test_completion_failure_propagates(llm, provider):
    provider.queue(RuntimeError("upstream down"))
    with pytest.raises(RuntimeError):
        await SlotFiller(llm).extract(Intent.SEARCH, "find sync", [], [])


def test_general_intent_has_no_prompt(llm):
    with pytest.raises(ValueError):
        SlotFiller(llm).build_prompt(Intent.GENERAL, "hi", [], [])
