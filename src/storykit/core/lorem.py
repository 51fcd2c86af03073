"""Deterministic lorem ipsum placeholder text."""

from __future__ import annotations

LOREM_WORDS: tuple[str, ...] = (
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit",
    "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore", "et",
    "dolore", "magna", "aliqua", "enim", "ad", "minim", "veniam", "quis",
    "nostrud", "exercitation", "ullamco", "laboris", "nisi", "aliquip", "ex", "ea",
    "commodo", "consequat", "duis", "aute", "irure", "in", "reprehenderit", "voluptate",
    "velit", "esse", "cillum", "fugiat", "nulla", "pariatur", "excepteur", "sint",
    "occaecat", "cupidatat", "non", "proident", "sunt", "culpa", "qui", "officia",
    "deserunt", "mollit", "anim", "id", "est", "laborum", "pellentesque", "habitant",
    "morbi", "tristique", "senectus", "netus", "et", "malesuada", "fames", "ac",
    "turpis", "egestas", "vestibulum", "tortor", "quam", "feugiat", "vitae", "ultricies",
    "legimus", "typi", "qui", "nusquam", "vici", "sunt", "signa", "consuetudium",
)  # fmt: skip

# Word count used when a field is marked ``lorem`` without a value
DEFAULT_LOREM_WORDS = 8


def lorem(word_count: int) -> str:
    """Return ``word_count`` words from :data:`LOREM_WORDS`, wrapping around.

    Word ``i`` is always ``LOREM_WORDS[i % len(LOREM_WORDS)]``.
    """
    if word_count < 0:
        raise ValueError(f"word_count must be >= 0, got {word_count}")
    size = len(LOREM_WORDS)
    return " ".join(LOREM_WORDS[i % size] for i in range(word_count))
