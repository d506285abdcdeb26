"""Trie-backed word list with O(1) membership and prefix queries."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, Iterator, Optional, Set

from .errors import LexiconUnavailable


logger = logging.getLogger(__name__)


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self) -> None:
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False

    def child(self, letter: str) -> Optional[TrieNode]:
        return self.children.get(letter)


class Lexicon:
    """
    Static dictionary of uppercase words.

    Membership goes through a set; prefix and word queries walk the trie.
    Read-only after construction, so one instance can be shared freely.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        self.root = TrieNode()
        self._words: Set[str] = set()
        for word in words:
            self._insert(word)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Lexicon:
        return cls(words)

    def _insert(self, word: str) -> None:
        word = word.strip().upper()
        if not word or word in self._words:
            return
        self._words.add(word)
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_word = True

    def _walk(self, prefix: str) -> Optional[TrieNode]:
        node = self.root
        for ch in prefix.upper():
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains(self, word: str, min_length: int = 1) -> bool:
        """Membership test; words shorter than ``min_length`` never count."""
        if len(word) < min_length:
            return False
        return word.upper() in self._words

    def is_word(self, word: str) -> bool:
        node = self._walk(word)
        return node is not None and node.is_word

    def has_prefix(self, prefix: str) -> bool:
        return self._walk(prefix) is not None

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    @property
    def word_count(self) -> int:
        return len(self._words)


def load_lexicon(path: str | Path) -> Lexicon:
    """
    Load a newline-delimited word list.

    Raises:
        LexiconUnavailable: If the file is missing, unreadable or holds no words
    """
    path = Path(path)
    start = time.perf_counter()
    try:
        with open(path, encoding="utf-8") as f:
            lexicon = Lexicon(line for line in f if line.strip())
    except (OSError, UnicodeDecodeError) as e:
        raise LexiconUnavailable(f"Could not load dictionary from {path}: {e}") from e

    if not len(lexicon):
        raise LexiconUnavailable(f"Dictionary at {path} contains no words")

    logger.debug(
        "Loaded %d words from %s in %.3f seconds",
        len(lexicon), path, time.perf_counter() - start,
    )
    return lexicon
