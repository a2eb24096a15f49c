"""General parsing utilities for recipe extraction."""

import re
from typing import Any, List, Optional
from urllib.parse import urlparse

_ISO_DURATION_RE = re.compile(
    r"^P(?:\d+(?:[.,]\d+)?Y)?(?:\d+(?:[.,]\d+)?M)?(?:\d+(?:[.,]\d+)?W)?(?:\d+(?:[.,]\d+)?D)?"
    r"(?:T(?:(?P<hours>\d+(?:[.,]\d+)?)H)?(?:(?P<minutes>\d+(?:[.,]\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:[.,]\d+)?)S)?)?$",
    re.I,
)


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def join_conjunction(items: List[str]) -> str:
    """English list with a final "and": "a", "a and b", "a, b, and c"."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return ", ".join(items[:-1]) + f", and {items[-1]}"


def _format_amount(raw: str) -> Optional[str]:
    value = float(raw.replace(",", "."))
    if value == 0:
        return None
    if value.is_integer():
        return str(int(value))
    return str(value)


def format_duration(duration: Any) -> str:
    """Render an ISO-8601 duration such as PT1H30M as "1 hours and 30 minutes".

    Only hours, minutes and seconds are rendered; zero components are
    omitted. Absent or unparseable values render as an empty string.
    """
    if not duration or not isinstance(duration, str):
        return ""
    match = _ISO_DURATION_RE.match(duration.strip())
    if not match:
        return ""
    parts: List[str] = []
    for unit in ("hours", "minutes", "seconds"):
        raw = match.group(unit)
        if raw is None:
            continue
        amount = _format_amount(raw)
        if amount:
            parts.append(f"{amount} {unit}")
    return join_conjunction(parts)


def extract_image(value: Any) -> str:
    """Collapse the shapes schema.org allows for ``image`` into one URL string."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        first = value[0]
        if isinstance(first, str):
            return first
        if isinstance(first, dict) and isinstance(first.get("url"), str):
            return first["url"]
        return ""
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        return value["url"]
    return ""


def first_text(value: Any) -> str:
    """Take a string, or the first element of a list, as text."""
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    return clean_text(str(value))


def coerce_string_list(value: Any) -> List[str]:
    """Coerce a string or list into a list of non-blank strings."""
    if isinstance(value, str):
        cleaned = clean_text(value)
        return [cleaned] if cleaned else []
    if isinstance(value, list):
        items = []
        for item in value:
            if isinstance(item, (str, int, float)) and not isinstance(item, bool):
                cleaned = clean_text(str(item))
                if cleaned:
                    items.append(cleaned)
        return items
    return []


def _is_how_to_step(entry: dict) -> bool:
    entry_type = entry.get("@type")
    if isinstance(entry_type, list):
        return "HowToStep" in entry_type
    return entry_type == "HowToStep"


def extract_instruction_text(instructions: Any) -> List[str]:
    """Extract step text from plain strings and HowToStep objects, in order."""
    if isinstance(instructions, str):
        instructions = [instructions]
    if not isinstance(instructions, list):
        return []
    steps: List[str] = []
    for entry in instructions:
        if isinstance(entry, str):
            cleaned = clean_text(entry)
        elif isinstance(entry, dict) and _is_how_to_step(entry):
            cleaned = clean_text(entry.get("text") or "")
        else:
            continue
        if cleaned:
            steps.append(cleaned)
    return steps


def host_from_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlparse(url).hostname
    except ValueError:
        return None
