"""
Note Extractor.

Turns a pasted study sheet into card candidates. Two sections are
recognized:

    重要俚语/习惯用语/短语          complex entries, one labeled block each
    foo bar
    意思解释： ...
    在文中的句子： ...
    简要文化背景或用法说明： ...
    翻译这句话的意思： ...

    简单常见表达                    simple entries, one "term - meaning" per line
    (sub-header)
    hello - 你好

Extraction never raises. Malformed entries are skipped and text without
either section yields an empty list.
"""

import logging
import re

from idiomcards.domain.constants import (
    COMPLEX_SECTION_MARKER,
    FIELD_LABELS,
    MEANING_LABEL,
    SIMPLE_ENTRY_SEPARATOR,
    SIMPLE_SECTION_MARKER,
)
from idiomcards.domain.value_objects.extraction_record import ExtractionRecord

logger = logging.getLogger(__name__)

# =============================================================================
# Pre-compiled Regex Patterns
# =============================================================================

_LABEL_ALTERNATION = "|".join(re.escape(label) for _, label in FIELD_LABELS)

# A newline followed by a term line: non-blank text that is not itself a
# labeled field, then whitespace (line breaks allowed), then the meaning label.
_ENTRY_START_RE = re.compile(
    rf"\n(?=[ \t]*(?!{_LABEL_ALTERNATION})\S[^\n]*?\s+{re.escape(MEANING_LABEL)})"
)


# =============================================================================
# Complex Entries
# =============================================================================


def _open_field(line: str, current: int | None) -> tuple[int, str] | None:
    """Check whether a line opens a field.

    A label counts only at the start of the line and only if it does not
    go back in the label order. Returns (field index, text after label).
    """
    stripped = line.lstrip()
    for index, (_, label) in enumerate(FIELD_LABELS):
        if stripped.startswith(label):
            if current is not None and index < current:
                return None
            return index, stripped[len(label) :]
    return None


def _parse_complex_block(block: str) -> ExtractionRecord | None:
    """Run the ordered-field grammar over one entry block.

    Returns:
        The record, or None when the block has no term or no meaning
    """
    lines = block.split("\n")
    parts: list[list[str]] = [[] for _ in FIELD_LABELS]
    current: int | None = None

    term, label, rest = lines[0].partition(MEANING_LABEL)
    if label:
        current = 0
        parts[0].append(rest)
    term = term.strip()

    for line in lines[1:]:
        opened = _open_field(line, current)
        if opened is not None:
            current, text = opened
            parts[current].append(text)
        elif current is not None:
            parts[current].append(line)
        # Text before the first label is noise

    values = {name: "\n".join(parts[i]).strip() for i, (name, _) in enumerate(FIELD_LABELS)}
    if not term or not values["meaning"]:
        return None
    return ExtractionRecord(term=term, **values)


def extract_complex_entries(note_text: str) -> list[ExtractionRecord]:
    """Extract labeled entries from the complex-entry section."""
    start = note_text.find(COMPLEX_SECTION_MARKER)
    if start == -1:
        return []

    section = note_text[start:]
    end = section.find(SIMPLE_SECTION_MARKER)
    if end > -1:
        section = section[:end]

    # First block is the section header itself
    blocks = _ENTRY_START_RE.split(section)[1:]

    records = []
    for block in blocks:
        record = _parse_complex_block(block)
        if record is None:
            logger.debug("Skipping malformed entry block: %r", block[:40])
            continue
        records.append(record)
    return records


# =============================================================================
# Simple Entries
# =============================================================================


def _parse_simple_line(line: str) -> ExtractionRecord | None:
    """Split a "term - meaning" line on its first separator."""
    if not line.strip() or SIMPLE_ENTRY_SEPARATOR not in line:
        return None
    term, _, meaning = line.partition(SIMPLE_ENTRY_SEPARATOR)
    term, meaning = term.strip(), meaning.strip()
    if not term or not meaning:
        return None
    return ExtractionRecord(term=term, meaning=meaning)


def extract_simple_entries(note_text: str) -> list[ExtractionRecord]:
    """Extract "term - meaning" lines from the simple-entry section."""
    start = note_text.find(SIMPLE_SECTION_MARKER)
    if start == -1:
        return []

    # [0] is the marker line, [1] the sub-header under it
    lines = note_text[start:].split("\n")[2:]

    records = []
    for line in lines:
        record = _parse_simple_line(line)
        if record is not None:
            records.append(record)
    return records


# =============================================================================
# Public API
# =============================================================================


def extract(note_text: str) -> list[ExtractionRecord]:
    """Extract card candidates from note text.

    Complex entries come first, then simple entries, each in note order.

    Args:
        note_text: Raw pasted notes

    Returns:
        Recovered records (empty if no known section yields anything)
    """
    if not note_text:
        return []

    text = note_text.replace("\r\n", "\n").replace("\r", "\n")
    complex_records = extract_complex_entries(text)
    simple_records = extract_simple_entries(text)

    logger.debug(
        "notes_extracted",
        extra={
            "complex_count": len(complex_records),
            "simple_count": len(simple_records),
            "text_length": len(text),
        },
    )
    return complex_records + simple_records
