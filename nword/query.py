"""Expand word sequences into likely continuations using a 3-gram trie."""

from __future__ import annotations

import logging
import os
import sys
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import chain
from pathlib import Path
from typing import TextIO

from nword.trie import TrieNode

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Query settings.

    ``freq_min`` skips infrequent n-grams (faster loading, fewer results);
    ``max_depth`` bounds how many times a result is extended further.
    """

    prefix_mode: bool = False
    suffix_mode: bool = False
    freq_min: int = 4
    max_depth: int = 2


class NgramStream:
    """Breadth-first expansion of ``seed`` one word at a time.

    The last two words of each sequence select 3-gram candidates from the
    trie; every candidate's final word is appended to give a new result,
    which is expanded again while its depth is below ``max_depth``.
    """

    def __init__(self, trie: TrieNode, seed: str, max_depth: int, depth: int = 0) -> None:
        self.trie = trie
        self.max_depth = max_depth
        self._queue: deque[tuple[str, int]] = deque([(seed, depth)])
        self._pending: list[tuple[str, int]] = []

    def __iter__(self) -> NgramStream:
        return self

    def __next__(self) -> str:
        while not self._pending:
            if not self._queue:
                raise StopIteration
            current, depth = self._queue.popleft()
            prefix = " ".join(current.split()[-2:])
            log.debug("lookup: '%s'", prefix)
            for ngram, freq in self.trie.lookup(prefix):
                extended = f"{current} {ngram.split()[-1]}"
                self._pending.append((extended, freq))
                if depth < self.max_depth:
                    self._queue.append((extended, depth + 1))
        ngram, _freq = self._pending.pop()
        return ngram


def stream_ngrams(trie: TrieNode, seed: str, max_depth: int) -> Iterator[str]:
    """Yield continuations of ``seed``.

    A seed of two or more words is expanded directly. A single word first
    yields every distinct 2-gram starting with it, then the expansions of
    each of those.
    """
    if len(seed.split(" ")) >= 2:
        return NgramStream(trie, seed, max_depth, 0)
    seeds = list(
        dict.fromkeys(" ".join(ngram.split()[:2]) for ngram, _ in trie.lookup(seed))
    )
    # the 2-grams count as one step down already
    expansions = (NgramStream(trie, good_seed, max_depth, 1) for good_seed in seeds)
    return chain(seeds, chain.from_iterable(expansions))


def suffix_transform(line: str) -> str:
    """Turn ``w1 w2 w3<TAB>count`` into ``w3 w2 w1<TAB>count`` for suffix search."""
    words = line.split()
    if not words:
        raise ValueError("empty ngram line")
    *head, last = words
    return " ".join(reversed(head)) + "\t" + last


def load_tries(data_dir: str | os.PathLike, opts: Options) -> tuple[TrieNode, TrieNode]:
    """Load the prefix and suffix tries from ``<data_dir>/3grams.txt``.

    A trie for a mode that is switched off is left empty.
    """
    path = Path(data_dir) / "3grams.txt"
    prefix_trie = TrieNode()
    suffix_trie = TrieNode()
    if opts.prefix_mode:
        with path.open(encoding="utf-8") as lines:
            prefix_trie = TrieNode.from_lines(lines, opts.freq_min)
    if opts.suffix_mode:
        with path.open(encoding="utf-8") as lines:
            suffix_trie = TrieNode.from_lines(map(suffix_transform, lines), opts.freq_min)
    return prefix_trie, suffix_trie


def answer(
    prefix_trie: TrieNode, suffix_trie: TrieNode, query: str, max_depth: int
) -> Iterator[str]:
    """Yield the continuations of ``query`` and then the sequences that lead into it."""
    normalised = query.strip().lower()
    if not normalised:
        return
    yield from stream_ngrams(prefix_trie, normalised, max_depth)
    reverse_query = " ".join(reversed(normalised.split()))
    for ngram in stream_ngrams(suffix_trie, reverse_query, max_depth):
        yield " ".join(reversed(ngram.split()))


def run(
    data_dir: str | os.PathLike,
    opts: Options,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Answer every query line of ``stdin`` on ``stdout``; return the number of results."""
    source = sys.stdin if stdin is None else stdin
    sink = sys.stdout if stdout is None else stdout
    prefix_trie, suffix_trie = load_tries(data_dir, opts)

    isatty = getattr(sink, "isatty", None)
    log.info("line-buffered" if isatty is not None and isatty() else "buf-buffered")

    total = 0
    for line in source:
        for ngram in answer(prefix_trie, suffix_trie, line, opts.max_depth):
            total += 1
            sink.write(ngram + "\n")
    sink.flush()
    log.info("exhausted after %d ngrams", total)
    return total