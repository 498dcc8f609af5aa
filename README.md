# nword

`nword` turns a tokenised text corpus, such as an OpenSubtitles token file,
into n-gram frequency tables. It then answers queries that expand a word or
phrase into the continuations seen in the corpus.

## Installation

```
pip install .
```

## Building the tables

```
nword build corpus.tok data/
```

The input is cleaned of subtitle timing lines, `{...}` and short `<...>`
markup. It is lowercased and split on whitespace, and line breaks become
sentence breaks. N-grams of length 1 to 4 that do not contain `.`, `?` or `!`
are counted. The input is split into one overlapping chunk per CPU, and the
chunks are counted in parallel processes. The counts go to `data/1grams.txt`
through `data/4grams.txt`, one `ngram<TAB>count` per line, most frequent first.
Each file written is reported on standard output.

## Querying

```
echo "i want" | nword query data/
```

Each line read from standard input is a seed. `nword` lowercases it and
prints one continuation per line. Blank lines are skipped. Continuations come
from `3grams.txt`:

* A seed of two or more words is extended one word at a time. The last two
  words select the matching 3-grams, and the search goes breadth first.
* A single word is first expanded to all distinct two-word phrases that start
  with it. Those phrases are printed, and then each of them is extended in
  turn.

Options:

* `-p`, `--prefix-mode`: look for continuations after the seed. This is the
  default when neither mode is given.
* `-s`, `--suffix-mode`: look for words that can come before the seed. The
  results are printed in normal reading order.
* `-f`, `--freq-min N`: ignore 3-grams seen fewer than `N` times (default 4).
  Loading stops at the first such line, because the file is sorted by count.
  Fewer 3-grams load faster and give fewer results.
* `-m`, `--max-depth N`: how many extension steps to take (default 2).
* `-v`, `--verbose LEVEL`: the logging level. It is one of `trace`, `debug`,
  `info`, `warn`, `warning`, `error` or `off`, and the default is `warn`. Log
  output goes to standard error.

A closed output pipe ends a query run quietly. A missing file or a malformed
`3grams.txt` line gives an error message and exit status 1.

## Use as a library

```python
from nword.trie import TrieNode
from nword.query import stream_ngrams

trie = TrieNode()
trie.insert("i want to", 10)
trie.insert("want to go", 5)
for phrase in stream_ngrams(trie, "i want", 2):
    print(phrase)
```

* `nword.trie.TrieNode` is a word-level prefix tree. It provides `insert`,
  `lookup`, and `from_lines`, which reads `ngram<TAB>count` lines.
* `nword.query` provides `Options`, `NgramStream`, `stream_ngrams`,
  `suffix_transform`, `load_tries`, `answer` and `run`. `run` reads from and
  writes to any text streams.
* `nword.build` provides `clean_text`, `tokenize`, `count_ngrams`,
  `build_ngrams`, `write_ngrams` and `run`, for building tables from Python
  code.