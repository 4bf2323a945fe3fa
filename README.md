# acmatch

Multi-pattern byte-string search based on the Aho-Corasick automaton.

Build a matcher from a set of patterns once, then search any number of
subjects for them in a single left-to-right pass. Two search modes are
offered:

- **first match**: the first match the scan reaches;
- **left-most longest**: among the matches reached during the scan, the
  longest, with ties going to the one reached first.

## Installation

```
pip install acmatch
```

## Usage

```python
from acmatch.api import PatternMatcher, create

matcher = PatternMatcher([b"he", b"she", b"his", b"her"])

result = matcher.match(b"ahhe")
print(result.begin, result.end, result.pattern_idx)   # 2 3 0

print(matcher.match_begin(b"shis2"))                  # 1

ua = create([b"Mozilla", b"Mozilla Mobile"])
r = ua.match_longest(b"User Agent containing string Mozilla Mobile")
print(r.begin, r.end)                                 # 29 42
```

Results are `acmatch.slow.MatchResult` objects with `begin`, `end` and
`pattern_idx`. Positions are byte offsets and `end` is inclusive, so the
matched bytes are `subject[r.begin:r.end + 1]`, equal to the pattern at
`r.pattern_idx` in the list given at construction. When nothing matches,
`match` and `match_longest` return `None`, and so does `match_begin`.

Patterns and subjects may be `bytes`, `bytearray`, `memoryview` or `str`;
text is encoded as UTF-8 and offsets refer to the encoded bytes. Anything
else raises `TypeError`. An empty pattern raises `ValueError`. If the same
pattern is given more than once, results report the index of its last
occurrence.

A pattern set must have fewer than 65535 patterns; a larger one raises
`acmatch.api.TooManyPatternsError`, a subclass of `ValueError`.

### Lower-level pieces

- `acmatch.slow.SlowAutomaton` builds the trie and fail links. It has its
  own `match` (first match), and can describe itself as text (`dump_text`)
  or as a Graphviz graph (`dump_dot`). Its states are `SlowState` objects
  with `goto(byte)` and `sorted_gotos()`.
- `acmatch.fast.FastAutomaton` is a compact, breadth-first renumbered form
  built from a `SlowAutomaton`. It provides `match`, `match_longest` and a
  readable `dump`. `acmatch.fast.MatchVariant` names the two search modes.

## What it does not do

acmatch is a library only: it has no command-line program. It reports a
single match per search; there is no mode that returns every match, and
none that prefers the right-most longest match.

## Running the tests

```
pip install -e ".[test]"
pytest
```