from directory.utils.hours import format_hour, format_hours


def test_format_hour():
    assert format_hour("09:00") == "9:00 AM"
    assert format_hour("17:30") == "5:30 PM"
    assert format_hour("00:15") == "12:15 AM"
    assert format_hour("12:00") == "12:00 PM"


def test_format_hour_unparseable_unchanged():
    assert format_hour("25:99") == "25:99"
    assert format_hour("noon") == "noon"


def test_format_hours_range():
    result = format_hours("Mon-Fri 09:00-17:00")
    assert "9:00 AM - 5:00 PM" in result
    assert result == "Mon-Fri 9:00 AM - 5:00 PM"


def test_format_hours_drops_text_after_end_time():
    assert format_hours("Sa: 10:00 - 14:00 (holidays vary)") == "Sa: 10:00 AM - 2:00 PM"


def test_format_hours_without_two_times_unchanged():
    assert format_hours("Closed") == "Closed"
    assert format_hours("Open from 08:00") == "Open from 08:00"
    assert format_hours("Mo 08:00-12:00, 13:00-17:00") == "Mo 08:00-12:00, 13:00-17:00"
