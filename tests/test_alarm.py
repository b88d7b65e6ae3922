"""Tests for the Alarm component."""

import datetime

import pytest

from icalgen.alarm import Action, Alarm, Related
from icalgen.event import Event
from icalgen.exceptions import InvalidArgumentError, MissingDependencyError


def test_default_alarm(event: Event) -> None:
    """Test a display alarm ten minutes before the event."""
    alarm = Alarm(None, event)
    assert alarm.type() == Action.DISPLAY
    assert alarm.trigger() == 600
    assert alarm.ics() == (
        "BEGIN:VALARM\r\n"
        "ACTION:DISPLAY\r\n"
        "TRIGGER:-PT10M\r\n"
        "DESCRIPTION:Event summary\r\n"
        "END:VALARM\r\n"
    )


def test_missing_event() -> None:
    """Test an alarm requires its event."""
    with pytest.raises(MissingDependencyError, match="`event` option required!"):
        Alarm({"type": "DISPLAY"})


@pytest.mark.parametrize(
    ("trigger", "expected"),
    [
        (300, "TRIGGER:-PT5M"),
        (datetime.timedelta(minutes=15), "TRIGGER:-PT15M"),
        (86400, "TRIGGER:-P1D"),
        (0, "TRIGGER:PT0S"),
        (-3600, "TRIGGER:PT1H"),
    ],
)
def test_relative_trigger(
    event: Event, trigger: int | datetime.timedelta, expected: str
) -> None:
    """Test relative triggers count seconds before the event."""
    alarm = Alarm({"trigger": trigger}, event)
    assert expected in alarm.ics_lines()


def test_trigger_before_and_after(event: Event) -> None:
    """Test triggers before and after the event read back consistently."""
    alarm = Alarm(None, event)
    alarm.trigger_before(900)
    assert alarm.trigger() == 900
    assert alarm.trigger_before() == 900
    assert "TRIGGER:-PT15M" in alarm.ics_lines()

    alarm.trigger_after(3600)
    assert alarm.trigger_after() == 3600
    assert alarm.trigger() == -3600
    assert "TRIGGER:PT1H" in alarm.ics_lines()


def test_related_trigger(event: Event) -> None:
    """Test a trigger relative to the end of the event."""
    alarm = Alarm({"trigger": 90061, "relatesTo": "end"}, event)
    assert alarm.relates_to() == Related.END
    assert "TRIGGER;RELATED=END:-P1DT1H1M1S" in alarm.ics_lines()


@pytest.mark.parametrize(
    "trigger",
    [
        datetime.datetime(2022, 8, 29, 8, 45, tzinfo=datetime.UTC),
        "2022-08-29T08:45:00Z",
        "2022-08-29T10:45:00+02:00",
    ],
)
def test_absolute_trigger(event: Event, trigger: datetime.datetime | str) -> None:
    """Test an absolute trigger is written in UTC."""
    alarm = Alarm({"trigger": trigger}, event)
    assert alarm.trigger() == datetime.datetime(
        2022, 8, 29, 8, 45, tzinfo=datetime.UTC
    )
    assert "TRIGGER;VALUE=DATE-TIME:20220829T084500Z" in alarm.ics_lines()


@pytest.mark.parametrize("trigger", ["not a date", "2022-08-29", True, None])
def test_invalid_trigger(event: Event, trigger: object) -> None:
    """Test invalid triggers are rejected and the alarm is unchanged."""
    alarm = Alarm({"trigger": 300}, event)
    with pytest.raises(InvalidArgumentError):
        alarm.trigger(trigger)  # type: ignore[arg-type]
    assert alarm.trigger() == 300


def test_invalid_type(event: Event) -> None:
    """Test an unknown action is rejected."""
    alarm = Alarm(None, event)
    with pytest.raises(InvalidArgumentError, match="type"):
        alarm.type("VIBRATE")
    assert alarm.type() == Action.DISPLAY


def test_repeat(event: Event) -> None:
    """Test a repeating alarm."""
    alarm = Alarm(
        {"repeat": {"times": 2, "interval": datetime.timedelta(minutes=5)}}, event
    )
    assert alarm.repeat().times == 2
    assert alarm.repeat().interval == 300
    assert alarm.ics_lines() == [
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        "TRIGGER:-PT10M",
        "REPEAT:2",
        "DURATION:PT5M",
        "DESCRIPTION:Event summary",
        "END:VALARM",
    ]


def test_repeat_requires_times_and_interval(event: Event) -> None:
    """Test both repeat fields are required."""
    alarm = Alarm(None, event)
    with pytest.raises(InvalidArgumentError):
        alarm.repeat({"times": 2})
    assert alarm.repeat() is None


def test_description(event: Event) -> None:
    """Test the description is used instead of the event summary."""
    alarm = Alarm({"description": "Leave now; really"}, event)
    assert "DESCRIPTION:Leave now\\; really" in alarm.ics_lines()

    event.summary(None)
    assert "DESCRIPTION:" in Alarm(None, event).ics_lines()


def test_audio_default_sound(event: Event) -> None:
    """Test an audio alarm without an attachment plays the default sound."""
    alarm = Alarm({"type": "audio"}, event)
    assert alarm.ics_lines() == [
        "BEGIN:VALARM",
        "ACTION:AUDIO",
        "TRIGGER:-PT10M",
        "ATTACH;VALUE=URI:Basso",
        "END:VALARM",
    ]


def test_audio_attachment(event: Event) -> None:
    """Test an audio alarm with a sound resource."""
    alarm = Alarm({"type": "AUDIO", "attach": "https://example.com/a.mp3"}, event)
    assert "ATTACH;VALUE=URI:https://example.com/a.mp3" in alarm.ics_lines()

    alarm.attach({"uri": "https://example.com/a.mp3", "mime": "audio/mpeg"})
    assert "ATTACH;FMTTYPE=audio/mpeg:https://example.com/a.mp3" in (
        alarm.ics_lines()
    )


def test_email(event: Event) -> None:
    """Test an email alarm with a subject and recipients."""
    alarm = Alarm(
        {
            "type": "email",
            "summary": "Reminder",
            "description": "Body",
            "attendees": [{"email": "jane@example.com"}],
        },
        event,
    )
    alarm.create_attendee({"name": "John", "email": "john@example.com"})
    assert [attendee.email() for attendee in alarm.attendees()] == [
        "jane@example.com",
        "john@example.com",
    ]
    assert alarm.ics_lines() == [
        "BEGIN:VALARM",
        "ACTION:EMAIL",
        "TRIGGER:-PT10M",
        "DESCRIPTION:Body",
        "SUMMARY:Reminder",
        "ATTENDEE;ROLE=REQ-PARTICIPANT:MAILTO:jane@example.com",
        'ATTENDEE;ROLE=REQ-PARTICIPANT;CN="John":MAILTO:john@example.com',
        "END:VALARM",
    ]
    assert event.attendees() == []


def test_extensions(event: Event) -> None:
    """Test extension attributes are written as properties."""
    alarm = Alarm(None, event).x("X-WR-ALARMUID", "abc").x("X-APPLE-DEFAULT", "1")
    assert alarm.ics_lines()[-3:] == [
        "X-WR-ALARMUID:abc",
        "X-APPLE-DEFAULT:1",
        "END:VALARM",
    ]


def test_to_json(event: Event) -> None:
    """Test the exported data can be used to create an equal alarm."""
    alarm = event.create_alarm(
        {
            "type": "EMAIL",
            "relatesTo": "END",
            "repeat": {"times": 2, "interval": 300},
            "summary": "Reminder",
            "x": [("X-FOO", "bar")],
        }
    )
    alarm.trigger_after(600).create_attendee("jane@example.com")

    data = alarm.to_json()
    assert data["trigger"] == -600
    assert data["relatesTo"] == "END"
    assert data["repeat"] == {"times": 2, "interval": 300}
    assert data["attendees"][0]["email"] == "jane@example.com"
    assert data["x"] == [{"key": "X-FOO", "value": "bar"}]

    restored = Alarm(data, event)
    assert restored.to_json() == data
    assert restored.ics() == alarm.ics()


def test_to_json_absolute_trigger(event: Event) -> None:
    """Test an absolute trigger is exported as an ISO 8601 string."""
    alarm = Alarm(
        {"trigger": datetime.datetime(2022, 8, 29, 8, 45, tzinfo=datetime.UTC)}, event
    )
    data = alarm.to_json()
    assert data["trigger"] == "2022-08-29T08:45:00+00:00"
    assert Alarm(data, event).trigger() == alarm.trigger()
