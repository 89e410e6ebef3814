from typing import Optional

from capsule.constants.constants import (
    Category,
    QUOTE_MAX_CHARS,
    THOUGHT_MAX_CHARS,
    TODO_MARKERS,
    URL_PREFIX,
    URL_SCHEME_SEPARATOR,
)


def classify_content(content: str) -> str:
    """
    Assign a category label from the shape of the text.
    Rules are checked in order, first match wins:
    link, task, quote (<= 20 chars), thought (<= 60 chars), note.
    """
    trimmed = content.strip()

    if trimmed.startswith(URL_PREFIX) or URL_SCHEME_SEPARATOR in trimmed:
        return Category.link.value

    lowered = trimmed.casefold()
    if any(marker in lowered for marker in TODO_MARKERS):
        return Category.task.value

    if len(trimmed) <= QUOTE_MAX_CHARS:
        return Category.quote.value
    if len(trimmed) <= THOUGHT_MAX_CHARS:
        return Category.thought.value
    return Category.note.value


def preview_category(text: str) -> Optional[str]:
    """Label shown while the user is still typing; None for blank input."""
    if not text or not text.strip():
        return None
    return classify_content(text)
