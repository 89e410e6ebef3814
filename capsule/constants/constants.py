"""Constants for inspiration categories and classification thresholds."""

from enum import Enum


class Category(str, Enum):
    """Enumeration of the labels the classifier can assign."""

    link = "Link"
    task = "Task"
    quote = "Quote"
    thought = "Thought"
    note = "Note"
    general = "General"


# Heuristic classification
URL_PREFIX = "http"
URL_SCHEME_SEPARATOR = "://"
TODO_MARKERS = ("todo", "待辦")
QUOTE_MAX_CHARS = 20
THOUGHT_MAX_CHARS = 60

# Retrieval
SEARCH_RESULT_LIMIT = 20
DRAW_RETRIES = 1
