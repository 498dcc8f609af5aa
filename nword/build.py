"""Build n-gram frequency tables from a tokenised subtitle corpus."""

from __future__ import annotations

import logging
import os
import re
import time
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

log = logging.getLogger(__name__)

NMIN = 1
NMAX = 4
MARGIN_BYTES = 50

_SENTENCE_END = frozenset({".", "?", "!"})

_BRACES = re.compile(r"\{\s*[^}]*\}")
_TAGS = re.compile(r"<[^>]{1,3}>")
_TIMESTAMPS = re.compile(
    r"\d\d\d\w? (\d\d : )+\d\d, \d\d\d\d? -- > (\d\d : )+\d\d, \d\d\d\d? "
)

_REPLACEMENTS = (
    ("\n- ", " "),
    ("\n... ", " "),
    (" ...\n", " . "),
    (" ,,,\n", " . "),
    (" -\n", " . "),
    ("'\n", " "),
    ("\n' ", " "),
    # a plain space would do, but a full stop keeps n-grams from spanning lines
    ("\n", " . "),
    (" .. ", " "),
    (" ...", ""),
    (" ' ", " "),
    (", ", " "),
    (": ", " "),
    (" - ", " "),
    ("- ", " "),
    (' " ', " "),
    ("' ", ""),  # joe' s -> joes
    ("' ", ""),  # can' t -> cant
)


def clean_text(text: str) -> str:
    """Strip subtitle markup and timestamps, lower-case and normalise punctuation."""
    cleaned = _BRACES.sub("", text)
    cleaned = _TAGS.sub("", cleaned)
    cleaned = _TIMESTAMPS.sub("", cleaned)
    cleaned = cleaned.lower()
    for old, new in _REPLACEMENTS:
        cleaned = cleaned.replace(old, new)
    return cleaned


def tokenize(text: str) -> list[str]:
    """Clean ``text`` and split it into whitespace-separated tokens."""
    return clean_text(text).split()


def count_ngrams(
    tokens: Sequence[str], nmin: int = NMIN, nmax: int = NMAX
) -> dict[int, Counter]:
    """Count n-grams of every length from ``nmin`` to ``nmax``.

    Windows holding a sentence-ending token are skipped.
    """
    counts: dict[int, Counter] = {}
    for n in range(nmin, nmax + 1):
        counter: Counter = Counter()
        for start in range(len(tokens) - n + 1):
            window = tokens[start:start + n]
            if _SENTENCE_END.intersection(window):
                continue
            counter[" ".join(window)] += 1
        counts[n] = counter
    return counts


def _count_chunk(chunk: bytes) -> dict[int, Counter]:
    started = time.perf_counter()
    tokens = tokenize(chunk.decode("utf-8", errors="replace"))
    log.debug("Tokenize %.2fs", time.perf_counter() - started)
    started = time.perf_counter()
    counts = count_ngrams(tokens, NMIN, NMAX)
    log.debug("ngrams: %.2fs", time.perf_counter() - started)
    return counts


def _chunks(data: bytes, workers: int) -> list[bytes]:
    size = len(data)
    chunk_size = size // workers
    return [
        data[i * chunk_size:min(i * chunk_size + chunk_size + MARGIN_BYTES, size)]
        for i in range(workers)
    ]


def build_ngrams(data: bytes, workers: int | None = None) -> dict[int, list[tuple[str, int]]]:
    """Count n-grams of ``data`` split across ``workers`` overlapping chunks.

    Returns, for each n, the n-grams with their counts sorted by falling count.
    """
    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    chunks = _chunks(data, workers)
    if workers == 1:
        per_chunk = [_count_chunk(chunk) for chunk in chunks]
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            per_chunk = list(pool.map(_count_chunk, chunks))

    result: dict[int, list[tuple[str, int]]] = {}
    for n in range(NMIN, NMAX + 1):
        started = time.perf_counter()
        merged: Counter = Counter()
        for counts in per_chunk:
            merged.update(counts[n])
        log.debug("Merge %dgrams: %.2fs", n, time.perf_counter() - started)
        started = time.perf_counter()
        result[n] = sorted(merged.items(), key=lambda item: item[1], reverse=True)
        log.debug("Sort %dgrams: %.2fs", n, time.perf_counter() - started)
    return result


def write_ngrams(
    ngrams: Mapping[int, Iterable[tuple[str, int]]], output_dir: str | os.PathLike
) -> list[Path]:
    """Write each table to ``<output_dir>/<n>grams.txt`` as ``ngram<TAB>count`` lines."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    written = []
    for n in sorted(ngrams):
        started = time.perf_counter()
        path = out / f"{n}grams.txt"
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            for ngram, count in ngrams[n]:
                handle.write(f"{ngram}\t{count}\n")
        log.debug("Write %s: %.2fs", path, time.perf_counter() - started)
        written.append(path)
    return written


def run(input_file: str | os.PathLike, output_dir: str | os.PathLike) -> list[Path]:
    """Read ``input_file``, count its n-grams and write the tables to ``output_dir``."""
    data = Path(input_file).read_bytes()
    log.info("Read %d bytes from %s", len(data), input_file)
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    paths = write_ngrams(build_ngrams(data), output_dir)
    for path in paths:
        print(f"Wrote {path}")
    return paths