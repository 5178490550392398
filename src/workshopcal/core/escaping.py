"""iCalendar TEXT value escaping."""

from typing import Optional

# Order matters: backslashes first so later escapes are not doubled.
_TEXT_ESCAPES = (
    ("\\", "\\\\"),
    (";", "\\;"),
    (",", "\\,"),
    ("\n", "\\n"),
    ("\r", ""),
)


def escape_text(text: Optional[str]) -> str:
    """Escape free text for an iCalendar TEXT property value.

    Carriage returns are dropped rather than escaped; the document writer
    owns line endings.

    Args:
        text: Text to escape. None and "" both yield "".

    Returns:
        The escaped text.
    """
    if not text:
        return ""
    escaped = str(text)
    for raw, replacement in _TEXT_ESCAPES:
        escaped = escaped.replace(raw, replacement)
    return escaped
