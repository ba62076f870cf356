"""Text extraction: split raw almanac text into per-section line groups."""

import logging
import re
from collections.abc import Sequence

from panchangclock.models import Category

logger = logging.getLogger(__name__)

# "Thithi details:", "Rahu Kalam detail:", or a bare "Varjyam:" with nothing after the colon
_HEADER_RE = re.compile(
    r"^\s*(?P<label>[A-Za-z][A-Za-z ]*?)\s*(?:\bdetails?\s*)?:\s*$",
    re.IGNORECASE,
)
_DIVIDER_RE = re.compile(r"^\s*=+\s*$")


def _normalize(label: str) -> str:
    return " ".join(label.lower().split())


def _header_label(line: str) -> str | None:
    """Return the normalized label if line is a section header, else None."""
    match = _HEADER_RE.match(line)
    if match is None:
        return None
    return _normalize(re.sub(r"\s+details?$", "", match.group("label"), flags=re.I))


def extract_section(text: str, labels: str | Sequence[str]) -> tuple[str, ...]:
    """Return the raw lines belonging to the first matching section.

    Alternates are tried in the given order; the first label that has a
    header anywhere in the text wins. The section runs from the line after
    its header (and after an optional ``====`` divider) up to the next
    header line or end of text.

    Args:
        text: Full almanac text.
        labels: One label or an ordered sequence of alternate spellings.

    Returns:
        Tuple of raw (untrimmed) lines. Empty if no label is present.
    """
    if isinstance(labels, str):
        labels = (labels,)
    lines = text.splitlines()
    header_labels = [_header_label(line) for line in lines]

    for label in labels:
        wanted = _normalize(label)
        try:
            index = header_labels.index(wanted)
        except ValueError:
            continue
        body: list[str] = []
        for offset, line in enumerate(lines[index + 1 :], start=index + 1):
            if header_labels[offset] is not None:
                break
            if not body and _DIVIDER_RE.match(line):
                continue
            body.append(line)
        return tuple(body)

    logger.debug("No section found for labels %s", list(labels))
    return ()


def extract_category(text: str, category: Category) -> tuple[str, ...]:
    """Extract the section for a category, trying its label alternates."""
    return extract_section(text, category.labels)
