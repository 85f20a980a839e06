"""Street and address string helpers used for display."""


def normalize_street(street: str) -> str:
    """
    Move a trailing house number to the front of a street.

    "Main St 123" -> "123 Main St"; "Main St" and "123" are unchanged.
    """
    tokens = [token for token in street.split() if token]
    if not tokens:
        return street

    last = tokens[-1]
    if last.isdecimal() and len(tokens) > 1:
        return f"{last} {' '.join(tokens[:-1])}"
    return street


def normalize_street_in_address(address: str) -> str:
    """Normalize only the street (first comma segment) of a full address."""
    segments = [segment.strip() for segment in address.split(",")]
    if not segments:
        return address
    return ", ".join([normalize_street(segments[0])] + segments[1:])


def format_address(address: str) -> str:
    """
    Reflow a one-line address onto several lines.

    "123 Main St, Springfield, IL, 62704" becomes
    "123 Main St\\nSpringfield, IL\\n62704". Only three or four segments
    are reflowed; anything else is returned unchanged.
    """
    parts = address.split(", ")
    if len(parts) == 4:
        return f"{parts[0]}\n{parts[1]}, {parts[2]}\n{parts[3]}"
    if len(parts) == 3:
        return f"{parts[0]}\n{parts[1]}, {parts[2]}"
    return address
