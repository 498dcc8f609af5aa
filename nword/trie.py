"""Word-level prefix tree holding n-gram frequencies."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

_FREQ = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


@dataclass
class TrieNode:
    """A node of a trie keyed by whole words.

    Each path from the root spells an n-gram; the node at the end of the
    path carries that n-gram's frequency (0 for nodes never inserted).
    """

    children: dict[str, TrieNode] = field(default_factory=dict)
    freq: int = 0

    def insert(self, ngram: str, freq: int) -> None:
        """Store ``ngram`` with ``freq``, replacing any earlier frequency."""
        node = self
        for word in ngram.split():
            node = node.children.setdefault(word, TrieNode())
        node.freq = freq

    def lookup(self, prefix: str) -> list[tuple[str, int]]:
        """Return every n-gram strictly below ``prefix`` with its frequency.

        Intermediate nodes are reported too, with their stored frequency.
        An unknown prefix gives an empty list.
        """
        node = self
        for word in prefix.split():
            node = node.children.get(word)
            if node is None:
                return []
        results = list(node._walk(prefix))
        return results[1:]

    def _walk(self, prefix: str):
        stack = [(prefix, self)]
        while stack:
            path, node = stack.pop()
            yield path, node.freq
            below = []
            for word, child in node.children.items():
                log.debug("prefix: '%s'\tchild: '%s'", path, word)
                below.append((f"{path} {word}" if path else word, child))
            stack.extend(reversed(below))

    @classmethod
    def from_lines(cls, lines: Iterable[str], freq_min: int) -> TrieNode:
        """Build a trie from ``ngram<TAB>count`` lines sorted by falling count.

        Reading stops at the first line whose count is below ``freq_min``.
        Raises ``ValueError`` on a line without a tab or with a bad count.
        """
        log.info("Load ngrams")
        trie = cls()
        loaded = 0
        for raw in lines:
            line = raw.rstrip("\n").rstrip("\r")
            ngram, sep, count = line.partition("\t")
            if not sep:
                raise ValueError(f"ngram line missing tab separator: {line!r}")
            if not _FREQ.fullmatch(count) or int(count) > _U32_MAX:
                raise ValueError(f"Bad freq: {count!r}")
            freq = int(count)
            if freq < freq_min:
                # lines are sorted by frequency, nothing further qualifies
                break
            trie.insert(ngram, freq)
            loaded += 1
        log.info("Loaded %d grams", loaded)
        return trie