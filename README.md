# crossgrid

crossgrid builds crossword grids. It takes a word list and fills a grid with
letters and black squares. Every run of letters across and every run of letters
down must be a word from the list. The search is a backtracking search. Before
each search round it prints how many choices it will try per cell. Each time it
finds a grid with fewer black squares than the best grid so far, it prints that
grid.

## Installation

```
pip install .
```

To install the test dependencies as well, use `pip install .[test]`. To run the
tests, run `pytest`.

## Usage

```
crossgrid DICTIONARY
```

`DICTIONARY` is a text file with one word per line. Letters are not
case-sensitive: `a`–`z` are turned into upper case. Any other character is an
error, including a carriage return. The only exception is the newline that ends
each line. The last line must end with a newline, or the command reports
"Unexpected end of dictionary". Words with more letters than the grid has
columns are skipped. If the maximum number of black squares is 0, the only words
kept are those whose length equals the number of rows or the number of columns.

The grid settings are read from standard input as whitespace-separated
integers:

1. Number of rows (> 0)
2. Number of columns (>= rows; rows × columns must not exceed 65536)
3. Minimum number of black squares (>= 0)
4. Maximum number of black squares (>= the minimum, <= the number of cells)
5. Heuristic for ordering the candidate letters of a cell:
   - `0`: weight
   - `1`: weighted shuffle
   - `2`: shuffle
   - any larger value: no reordering
6. Options. This is the sum of these flags:
   - `1`: symmetric black squares
   - `2`: connected white squares
   - `4`: linear spread of black squares
   - `8`: iterative choices. Each round starts at one choice per cell and allows one more choice per round.
7. Random seed (optional). If it is missing or is not an integer, the current
   time is used.

Example:

```
echo "4 4 0 2 0 3 42" | crossgrid words.txt
```

The output has two kinds of lines. One is a `CHOICES n` line at the start of
each round. The other is a grid, which begins with `BLACK SQUARES n`, followed by
one line per row. Each row shows its symbols separated by spaces, and `#` marks a
black square:

```
CHOICES <n>
BLACK SQUARES <n>
<row 1>
<row 2>
...
```

Each grid uses fewer black squares than the grid printed before it. A new round
starts only if the last round skipped some choices and did not stop early. A
round stops early when a grid is found whose black-square count is already at
the minimum allowed, since no better grid could then be accepted.

The command exits with status 1 and a message on standard error in these cases:

- the number of arguments is wrong
- the settings are invalid
- the dictionary cannot be opened or holds an invalid character

## Library use

```python
from crossgrid.mtrand import MersenneTwister
from crossgrid.trie import load_dictionary
from crossgrid.solver import Generator, GridSettings, Heuristic, Option, Solution

settings = GridSettings(4, 4, 0, 2, Heuristic.WEIGHT, Option.SYM_BLACKS)
settings.validate()
trie = load_dictionary("words.txt", settings.rows, settings.cols, settings.blacks_max)
for event in Generator(settings, trie, MersenneTwister(42)).run():
    if isinstance(event, Solution):
        print(event.render())
```

- `crossgrid.trie`:
  - `parse_dictionary(text, rows, cols, blacks_max)` builds a `Trie` from a string.
  - `load_dictionary(...)` builds a `Trie` from a file.
  - Both raise `DictionaryError` on bad input.
- `crossgrid.solver.GridSettings.validate()` raises `ValueError` for settings that describe no valid grid. The `Generator` constructor calls it as well.
- `Generator.run()` yields two kinds of events:
  - a `ChoicesRound` at the start of each round
  - a `Solution` (with `blacks` and `rows`) for each better grid found
- `crossgrid.cli.parse_settings(text)` parses the standard-input format described above.
- `crossgrid.cli.usage_text(program)` returns the usage message.
- `crossgrid.mtrand.MersenneTwister` is a self-contained MT19937 generator, so a given seed always produces the same sequence of grids.

The search recurses once per cell. The `crossgrid` command raises Python's
recursion limit to suit the grid size. Library callers with large grids may need
to do the same.

## What it does not do

crossgrid produces only the grid layout. It does not write clues. It does not
number the words or list them separately. It does not save or export grids in
any format other than the plain text shown above.