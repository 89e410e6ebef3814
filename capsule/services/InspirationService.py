"""Retrieval engine: capture, random draw, keyword search and removal of inspirations."""

import logging
import random
from typing import Iterable, List, Optional, Union

from capsule.core.config import settings
from capsule.core.errors import ValidationError
from capsule.schemas.inspirationSchema import InspirationResponse
from capsule.services.InspirationStore import InspirationStore
from capsule.utils.classify_content import classify_content

logger = logging.getLogger(__name__)


def normalize_categories(categories: Union[str, Iterable[str], None]) -> List[str]:
    """
    Trimmed, de-duplicated, non-blank category filter; empty means unfiltered.
    A bare string is a single category.

    Raises:
        ValidationError: an entry is neither a string nor None
    """
    if not categories:
        return []
    if isinstance(categories, str):
        categories = [categories]

    cleaned = set()
    for category in categories:
        if category is None:
            continue
        if not isinstance(category, str):
            raise ValidationError(f"Category must be a string, got {type(category).__name__}")
        if category.strip():
            cleaned.add(category.strip())
    return sorted(cleaned)


class InspirationService:
    """
    Orchestrates the store to capture, draw, search and delete inspirations.

    Random draws never load the collection: they count the (optionally
    filtered) records, pick an offset uniformly in ``[0, n)`` and read the
    one record at that offset with the same filter.
    """

    def __init__(
        self,
        store: InspirationStore,
        rng: Optional[random.Random] = None,
        search_limit: Optional[int] = None,
        draw_retries: Optional[int] = None,
        default_category: Optional[str] = None
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.search_limit = settings.SEARCH_RESULT_LIMIT if search_limit is None else search_limit
        self.draw_retries = settings.DRAW_RETRIES if draw_retries is None else draw_retries
        self.default_category = default_category or settings.DEFAULT_CATEGORY

    async def add_inspiration(
        self,
        content: str,
        category: Optional[str] = None
    ) -> InspirationResponse:
        """
        Persist new content.

        Args:
            content: Text to store; must not be blank after trimming
            category: Explicit label; derived from the content when omitted

        Returns:
            The stored record with its generated id and timestamp

        Raises:
            ValidationError: content is empty
            StoreError: the insert failed, nothing was stored
        """
        trimmed = (content or "").strip()
        if not trimmed:
            raise ValidationError("Inspiration content must not be empty")

        if category is None:
            label = classify_content(trimmed)
        else:
            label = category.strip() or self.default_category

        inspiration = await self.store.insert(trimmed, label)
        logger.info(f"Stored inspiration {inspiration.id} as {inspiration.category}")
        return inspiration

    async def draw_random(
        self,
        categories: Union[str, Iterable[str], None] = None
    ) -> Optional[InspirationResponse]:
        """
        Pick one inspiration uniformly at random.

        Args:
            categories: Restrict the draw to these labels (or one label); None or empty draws from everything

        Returns:
            An inspiration, or None when nothing matches
        """
        selected = normalize_categories(categories)

        for attempt in range(self.draw_retries + 1):
            total = await self.store.count(selected)
            if total == 0:
                logger.debug(f"No inspirations to draw from (filter={selected})")
                return None

            offset = self.rng.randrange(total)
            inspiration = await self.store.read_at(offset, selected)
            if inspiration is not None:
                return inspiration

            # Collection shrank between count and read
            logger.warning(
                f"No inspiration at offset {offset} of {total} "
                f"(attempt {attempt + 1}/{self.draw_retries + 1})"
            )

        return None

    async def search(self, query: str) -> List[InspirationResponse]:
        """Newest-first inspirations whose content contains ``query`` (case-insensitive)."""
        results = await self.store.search((query or "").strip(), self.search_limit)
        logger.debug(f"Search {query!r} matched {len(results)} inspirations")
        return results

    async def get_inspiration(self, inspiration_id: str) -> Optional[InspirationResponse]:
        return await self.store.get(inspiration_id)

    async def delete_inspiration(self, inspiration_id: str) -> None:
        """Remove an inspiration; deleting an unknown id succeeds."""
        removed = await self.store.delete(inspiration_id)
        if removed:
            logger.info(f"Deleted inspiration {inspiration_id}")
        else:
            logger.debug(f"Delete of unknown inspiration {inspiration_id} ignored")

    async def list_categories(self) -> List[str]:
        """Distinct non-empty categories in use, sorted."""
        return sorted(set(await self.store.distinct_categories()))
