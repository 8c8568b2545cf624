"""
Decoder for the model's ``SUGGESTION_<n>:`` reply format.

The reply is free text, so decoding is lenient: unknown lines are ignored,
unknown type/priority values fall back to defaults, and a block without a
title, description or action is dropped rather than reported as an error.
"""
from __future__ import annotations

import logging

from cfcoach.models import AISuggestion, SuggestionPriority, SuggestionType

logger = logging.getLogger(__name__)

SUGGESTION_DELIMITER = "SUGGESTION_"
MAX_SUGGESTIONS = 6

_TYPE_MAP = {t.value: t for t in SuggestionType}
_PRIORITY_MAP = {
    "high": SuggestionPriority.HIGH,
    "medium": SuggestionPriority.MEDIUM,
    "low": SuggestionPriority.LOW,
}

FIELD_PREFIXES = {
    "Type:": "type",
    "Priority:": "priority",
    "Title:": "title",
    "Description:": "description",
    "Action:": "action",
    "URL:": "url",
}


def parse_suggestion_type(value: str) -> SuggestionType:
    return _TYPE_MAP.get(value.strip().lower(), SuggestionType.PRACTICE)


def parse_priority(value: str) -> SuggestionPriority:
    return _PRIORITY_MAP.get(value.strip().lower(), SuggestionPriority.MEDIUM)


def _read_fields(block: str) -> dict:
    fields = {}
    for raw_line in block.strip().splitlines():
        line = raw_line.strip()
        for prefix, key in FIELD_PREFIXES.items():
            if line.startswith(prefix):
                # Later duplicates overwrite earlier ones.
                fields[key] = line[len(prefix):].strip()
                break
    return fields


def parse_block(block: str) -> AISuggestion | None:
    """Decode one block (the text after a ``SUGGESTION_`` delimiter).

    Returns:
        The suggestion, or None when title, description or action is empty.
    """
    fields = _read_fields(block)
    title = fields.get("title", "")
    description = fields.get("description", "")
    action = fields.get("action", "")
    if not title or not description or not action:
        return None

    url = fields.get("url")
    if url == "none" or not url:
        url = None

    return AISuggestion(
        title=title,
        description=description,
        type=parse_suggestion_type(fields.get("type", "")),
        priority=parse_priority(fields.get("priority", "")),
        action_text=action,
        action_url=url,
    )


def parse_suggestions(text) -> list[AISuggestion]:
    """Decode a model reply into at most MAX_SUGGESTIONS suggestions.

    Never raises: empty, non-string or malformed input yields an empty list.
    Source order is preserved.
    """
    if not isinstance(text, str) or not text:
        return []

    suggestions = []
    blocks = text.split(SUGGESTION_DELIMITER)[1:]
    for number, block in enumerate(blocks, start=1):
        suggestion = parse_block(block)
        if suggestion is None:
            logger.debug(f"Dropping incomplete suggestion block #{number}")
            continue
        suggestions.append(suggestion)
        if len(suggestions) == MAX_SUGGESTIONS:
            break

    logger.info(
        f"Parsed {len(suggestions)} suggestions from {len(blocks)} blocks"
    )
    return suggestions
