"""Translation memory index.

Keeps prior translation pairs per (source locale, target locale) pair and
answers similarity queries against their source text. Each pair holds at
most ``capacity`` entries; the oldest entry is dropped first.
"""

import threading
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Tuple

from infrastructure.i18n.models import TranslationMemoryEntry
from infrastructure.i18n.similarity import DEFAULT_MAX_LENGTH, rank_by_similarity
from infrastructure.i18n.storage import TranslationRepository
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEFAULT_CAPACITY = 1000


class TranslationMemory:
    """Process-wide, thread-safe translation memory.

    When disabled, recording is a no-op and searches return nothing.

    Attributes:
        repository: Optional storage where recorded entries are persisted.
        enabled: Whether the memory is in use.
        capacity: Maximum entries kept per locale pair.
        max_similarity_length: Length guard passed to the similarity matcher.
    """

    def __init__(
        self,
        repository: Optional[TranslationRepository] = None,
        enabled: bool = True,
        capacity: int = DEFAULT_CAPACITY,
        max_similarity_length: Optional[int] = DEFAULT_MAX_LENGTH,
    ):
        self.repository = repository
        self.enabled = enabled
        self.capacity = capacity
        self.max_similarity_length = max_similarity_length
        self._entries: Dict[Tuple[str, str], Deque[TranslationMemoryEntry]] = {}
        self._lock = threading.Lock()

    def add(self, entry: TranslationMemoryEntry) -> None:
        """Add an entry to the in-process index only."""
        with self._lock:
            entries = self._entries.get(entry.pair)
            if entries is None:
                entries = deque(maxlen=self.capacity)
                self._entries[entry.pair] = entries
            entries.append(entry)

    async def record(self, entry: TranslationMemoryEntry) -> None:
        """Add an entry to the index and persist it."""
        if not self.enabled:
            return
        self.add(entry)
        if self.repository is not None:
            await self.repository.add_to_translation_memory(entry)

    async def load(self) -> int:
        """Fill the index from storage. Returns the number of entries loaded."""
        if not self.enabled or self.repository is None:
            return 0
        return self.load_entries(await self.repository.get_translation_memory())

    def load_entries(self, entries: Iterable[TranslationMemoryEntry]) -> int:
        count = 0
        for entry in entries:
            self.add(entry)
            count += 1
        logger.info("translation_memory_loaded", entry_count=count)
        return count

    def entries(self, source_locale: str, target_locale: str) -> List[TranslationMemoryEntry]:
        with self._lock:
            return list(self._entries.get((source_locale, target_locale), ()))

    def search(
        self,
        source_text: str,
        source_locale: str,
        target_locale: str,
        threshold: float = 0.8,
    ) -> List[TranslationMemoryEntry]:
        """Entries whose source text is similar enough to ``source_text``.

        Returns:
            Copies of matching entries with ``similarity`` set to the score,
            best match first.
        """
        if not self.enabled:
            return []

        candidates = self.entries(source_locale, target_locale)
        ranked = rank_by_similarity(
            source_text,
            candidates,
            lambda entry: entry.source_text,
            threshold,
            max_length=self.max_similarity_length,
        )
        return [
            TranslationMemoryEntry(
                source_text=entry.source_text,
                target_text=entry.target_text,
                source_locale=entry.source_locale,
                target_locale=entry.target_locale,
                similarity=score,
                context=entry.context,
                metadata=entry.metadata,
            )
            for entry, score in ranked
        ]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._entries.values())
