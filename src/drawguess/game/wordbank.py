"""Word pool handling for draw-and-guess turns."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = structlog.get_logger(__name__)

DEFAULT_WORDS: tuple[str, ...] = (
    "Apple", "Banana", "Pizza", "Rocket", "Elephant", "Guitar", "Computer",
    "Mountain", "Spider", "Laptop", "Football", "Cloud", "Sword", "Dragon",
    "Castle", "Robot", "Cactus", "Hammer", "Bicycle", "Diamond", "Tree",
    "Car", "Book", "Sun", "Moon", "Star", "Flower", "River", "Bridge",
    "House", "Dog", "Cat", "Bird", "Fish", "Snake", "Lion", "Tiger",
    "Bear", "Monkey", "Horse", "Airplane", "Alarm", "Alien", "Angel",
    "Ant", "Artist", "Astronaut", "Baby", "Balloon", "Bank",
)  # fmt: skip

MASK_CHAR = "_"


def distinct_words(words: Iterable[object]) -> list[str]:
    """Trim entries and drop blanks and case-insensitive duplicates.

    Args:
        words: Raw entries, typically from client settings.

    Returns:
        Distinct non-empty words in first-seen order.
    """
    seen: set[str] = set()
    result: list[str] = []
    for raw in words:
        if not isinstance(raw, str):
            continue
        word = " ".join(raw.split())
        key = word.lower()
        if word and key not in seen:
            seen.add(key)
            result.append(word)
    return result


def mask_word(word: str) -> str:
    """Build the public hint for a word.

    Every non-space character becomes an underscore, characters are separated
    by single spaces, and the spaces of multi-word phrases stay visible.

    Args:
        word: The secret word.

    Returns:
        Masked hint, e.g. "ice cream" -> "_ _ _   _ _ _ _ _".
    """
    return " ".join(" " if char == " " else MASK_CHAR for char in word)


def normalize_guess(text: str) -> str:
    """Normalize text for guess comparison (trimmed, case-insensitive)."""
    return text.strip().lower()


class WordBank:
    """Supplies the word pool for a room and evaluates guesses.

    Attributes:
        default_words: Built-in pool used when a room has no usable custom list.
        min_custom_words: Distinct entries a custom list needs to replace the default pool.
    """

    def __init__(
        self,
        default_words: Sequence[str] | None = None,
        *,
        min_custom_words: int = 3,
    ) -> None:
        """Initialize the word bank.

        Args:
            default_words: Built-in pool. Uses DEFAULT_WORDS if None.
            min_custom_words: Minimum size of an accepted custom list.
        """
        self.default_words = distinct_words(default_words if default_words is not None else DEFAULT_WORDS)
        self.min_custom_words = min_custom_words

    def resolve_pool(self, custom_words: object) -> list[str]:
        """Pick the pool a room should draw candidates from.

        Args:
            custom_words: Client supplied list (any shape).

        Returns:
            The cleaned custom list if large enough, otherwise the default pool.
        """
        if isinstance(custom_words, (list, tuple)):
            words = distinct_words(custom_words)
            if len(words) >= self.min_custom_words:
                return words
            if words:
                logger.info(
                    "Custom word list too small, using default pool",
                    provided=len(words),
                    required=self.min_custom_words,
                )
        return list(self.default_words)

    @staticmethod
    def get_word_options(pool: Sequence[str], count: int = 3) -> list[str]:
        """Sample candidate words without repetition.

        Args:
            pool: Words to sample from.
            count: Number of candidates wanted.

        Returns:
            Up to ``count`` distinct words; fewer when the pool is smaller.
        """
        words = distinct_words(pool)
        return random.sample(words, min(count, len(words)))

    @staticmethod
    def check_guess(word: str, guess: str) -> bool:
        """Check a guess against the secret word.

        Args:
            word: The secret word.
            guess: The raw guess text.

        Returns:
            True on an exact match after trimming and lowercasing.
        """
        return bool(word) and normalize_guess(guess) == normalize_guess(word)
