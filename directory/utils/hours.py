"""Opening hours display helpers."""
import re
from datetime import datetime

TIME_PATTERN = re.compile(r"\d{2}:\d{2}")


def format_hour(time: str) -> str:
    """Convert "17:30" to "5:30 PM". Unparseable input is returned as-is."""
    try:
        parsed = datetime.strptime(time.strip(), "%H:%M")
    except ValueError:
        return time
    hour = parsed.hour % 12 or 12
    suffix = "AM" if parsed.hour < 12 else "PM"
    return f"{hour}:{parsed.minute:02d} {suffix}"


def format_hours(hours: str) -> str:
    """
    Rewrite a 24-hour range inside free text in 12-hour form.

    "Mon-Fri 09:00-17:00" -> "Mon-Fri 9:00 AM - 5:00 PM". Text after the end
    time is dropped. Unless exactly two times are found the text is
    returned unchanged.
    """
    matches = list(TIME_PATTERN.finditer(hours))
    if len(matches) != 2:
        return hours

    start_match, end_match = matches
    prefix = hours[:start_match.start()]
    return f"{prefix}{format_hour(start_match.group())} - {format_hour(end_match.group())}"
