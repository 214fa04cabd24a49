"""Helpers for JIRA wiki markup.

The escaping here is best-effort: it neutralizes the characters JIRA most
often misreads, but there is no general way to make arbitrary text inert.
"""

RESERVED = "-*_?[]{}"


def escape(text: str) -> str:
    """Backslash-escape every reserved character in text."""
    return "".join("\\" + ch if ch in RESERVED else ch for ch in text)


def link(label: str, url: str) -> str:
    return f"[{label}|{url}]"


def color(name: str, text: str) -> str:
    return f"{{color:{name}}}{text}{{color}}"


def panel(text: str) -> str:
    return f"{{panel}}{text}{{panel}}"


def header_row(*cells: str) -> str:
    return "||" + "||".join(cells) + "||"


def row(*cells: str) -> str:
    return "|" + "|".join(cells) + "|"


# ---------------------------------------------------------------------------
# Status colors
# ---------------------------------------------------------------------------

STATUS_COLORS = {
    "Open": "red",
    "OPEN": "red",
    "Resolved": "green",
    "Closed": "green",
    "CLOSED": "green",
}
DEFAULT_COLOR = "blue"


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_COLOR)


def decode_status(status: str) -> str:
    """Wrap a status label in the color that matches it."""
    return color(status_color(status), status)
