"""Backtracking crossword grid generator."""

from __future__ import annotations

import enum
from collections.abc import Generator as _Gen
from dataclasses import dataclass

from .mtrand import MersenneTwister
from .trie import BLACK, Letter, Node, Trie

UNKNOWN = "."
WHITE = "*"
CELLS_MAX = 1 << 16


class Heuristic(enum.IntEnum):
    """Ordering applied to the candidate letters of a cell."""

    WEIGHT = 0
    WEIGHTED_SHUFFLE = 1
    SHUFFLE = 2


class Option(enum.IntFlag):
    """Generation flags; the options value is a sum of these."""

    SYM_BLACKS = 1
    CONNECTED_WHITES = 2
    LINEAR_BLACKS = 4
    ITERATIVE_CHOICES = 8


@dataclass
class GridSettings:
    """Grid dimensions, black square limits, heuristic and options."""

    rows: int
    cols: int
    blacks_min: int
    blacks_max: int
    heuristic: int = Heuristic.WEIGHT
    options: int = 0
    seed: int | None = None

    def validate(self) -> None:
        """Raise ValueError when the settings describe no valid grid."""
        if (
            self.rows < 1
            or self.rows > self.cols
            or self.rows > CELLS_MAX // self.cols
            or self.blacks_min < 0
            or self.blacks_min > self.blacks_max
            or self.blacks_max > self.rows * self.cols
        ):
            raise ValueError("Invalid grid settings")


@dataclass(frozen=True)
class ChoicesRound:
    """Start of a search pass limited to ``choices_max`` choices per cell."""

    choices_max: int


@dataclass(frozen=True)
class Solution:
    """A filled grid: one string of symbols per row."""

    blacks: int
    rows: tuple[str, ...]

    def render(self) -> str:
        lines = [f"BLACK SQUARES {self.blacks}"]
        lines.extend(" ".join(row) for row in self.rows)
        return "\n".join(lines)


@dataclass(eq=False)
class _Cell:
    index: int
    row: int
    col: int
    symbol: str
    letter_hor: Letter
    letter_ver: Letter
    hor_len_max: int
    ver_len_max: int
    sym180: int
    sym90: int
    pos: int


@dataclass
class _Choice:
    hor: Letter
    ver: Letter
    weight: int = 0


def _first_letter(node: Node) -> Letter | None:
    return node.letters[0] if node.letters else None


class Generator:
    """Fills a grid with dictionary words, yielding progressively better grids."""

    def __init__(self, settings: GridSettings, trie: Trie, rng: MersenneTwister) -> None:
        settings.validate()
        self.settings = settings
        self.trie = trie
        self.rng = rng
        rows, cols = settings.rows, settings.cols
        self._rows, self._cols = rows, cols
        options = int(settings.options)
        self._sym_blacks = bool(options & Option.SYM_BLACKS)
        self._connected_whites = bool(options & Option.CONNECTED_WHITES)
        self._linear_blacks = bool(options & Option.LINEAR_BLACKS)
        iterative = bool(options & Option.ITERATIVE_CHOICES)
        h = int(settings.heuristic)
        self._heuristic = Heuristic(h) if h in (0, 1, 2) else None
        self._blacks_min = settings.blacks_min
        self._blacks_max = settings.blacks_max
        self._choices_max = trie.annotate(rows, cols, settings.blacks_max, iterative)

        step = trie.root_letter.len_max + 1
        self._blacks2_all = [(rows - i - 1) // step for i in range(rows)]
        self._blacks2_all_cols = [(cols - i - 1) // step for i in range(cols)]
        self._blacks2 = [cols // step] * rows
        self._blacks2_cols = [rows // step] * cols
        self._b2n_rows = self._blacks2[0] * rows
        self._b2n_cols = self._blacks2_cols[0] * cols

        self._ct = ct = cols + 2
        root = trie.root_letter
        self._cells: list[_Cell] = []
        for r in range(-1, rows + 1):
            for c in range(-1, cols + 1):
                inside = 0 <= r < rows and 0 <= c < cols
                self._cells.append(
                    _Cell(
                        index=len(self._cells),
                        row=r,
                        col=c,
                        symbol=UNKNOWN if inside else BLACK,
                        letter_hor=root,
                        letter_ver=root,
                        hor_len_max=cols - c,
                        ver_len_max=rows - r,
                        sym180=(rows - r) * ct + cols - c,
                        sym90=(c + 1) * ct + r + 1,
                        pos=r * cols + c + 1,
                    )
                )

        self._cells_n = rows * cols
        self._blacks1_n = 0
        self._blacks3_n = 0
        self._whites_n = 0
        self._first_white = 0
        self._sym90 = rows == cols
        self._blacks_ratio = self._blacks_max / self._cells_n
        self._partial = False
        self._hor_len_min = self._hor_len_max = 0
        self._ver_len_min = self._ver_len_max = 0

    def run(self) -> _Gen[ChoicesRound | Solution, None, None]:
        """Yield search passes and each grid found with fewer black squares."""
        while True:
            yield ChoicesRound(self._choices_max)
            self._partial = False
            r = yield from self._solve_grid(self._ct + 1)
            self._choices_max += 1
            if not (self._partial and not r):
                break

    def _solve_grid(self, index: int):
        cells, ct = self._cells, self._ct
        cell = cells[index]
        if cell.row < self._rows:
            if cell.col < self._cols:
                return (
                    yield from self._solve_cell(
                        cell,
                        cells[index - 1].letter_hor.next_node,
                        cells[index - ct].letter_ver.next_node,
                    )
                )
            letter = _first_letter(cells[index - 1].letter_hor.next_node)
            return (yield from self._solve_end_cell(letter, index + 2))
        if cell.col < self._cols:
            letter = _first_letter(cells[index - ct].letter_ver.next_node)
            return (yield from self._solve_end_cell(letter, index + 1))
        self._blacks_max = self._blacks1_n - 1
        self._blacks_ratio = self._blacks_max / self._cells_n
        grid = tuple(
            "".join(cells[(r + 1) * ct + c + 1].symbol for c in range(self._cols))
            for r in range(self._rows)
        )
        yield Solution(self._blacks1_n, grid)
        return int(self._blacks_min > self._blacks_max)

    def _solve_end_cell(self, letter: Letter | None, index: int):
        if letter is not None and letter.is_black and letter.leaves_n:
            letter.leaves_n -= 1
            r = yield from self._solve_grid(index)
            letter.leaves_n += 1
            return r
        return 0

    def _set_length_bounds(self, cell: _Cell) -> None:
        if self._sym_blacks:
            cells, ct = self._cells, self._ct
            mirror = cells[cell.sym180]
            cur = cell.sym180
            while cells[cur].symbol not in (UNKNOWN, BLACK):
                cur -= 1
            self._hor_len_min = mirror.col - cells[cur].col
            while cells[cur].symbol != BLACK:
                cur -= 1
            self._hor_len_max = mirror.col - cells[cur].col
            cur = cell.sym180
            while cells[cur].symbol not in (UNKNOWN, BLACK):
                cur -= ct
            self._ver_len_min = mirror.row - cells[cur].row
            while cells[cur].symbol != BLACK:
                cur -= ct
            self._ver_len_max = mirror.row - cells[cur].row
        else:
            self._hor_len_max = cell.hor_len_max
            self._ver_len_max = cell.ver_len_max
            if self._blacks1_n < self._blacks_max:
                self._hor_len_min = self._ver_len_min = 0
            else:
                self._hor_len_min = self._hor_len_max
                self._ver_len_min = self._ver_len_max

    def _check_letters(self, hor: Letter, ver: Letter) -> bool:
        return bool(
            hor.leaves_n
            and hor.len_min <= self._hor_len_max
            and hor.len_max >= self._hor_len_min
            and ver.leaves_n
            and ver.len_min <= self._ver_len_max
            and ver.len_max >= self._ver_len_min
        )

    def _check_letter(self, letter: Letter) -> bool:
        return (
            letter.leaves_n > 1
            and letter.len_min <= self._hor_len_max
            and letter.len_max >= self._hor_len_min
            and letter.len_min <= self._ver_len_max
            and letter.len_max >= self._ver_len_min
        )

    def _make_choice(self, hor: Letter, ver: Letter) -> _Choice:
        weight = 0
        if self._heuristic is Heuristic.WEIGHT:
            weight = hor.leaves_n + ver.leaves_n if not hor.is_black else 1
        elif self._heuristic is Heuristic.WEIGHTED_SHUFFLE:
            weight = self.rng.below(hor.leaves_n + ver.leaves_n) if not hor.is_black else 0
        return _Choice(hor, ver, weight)

    def _collect_choices(self, cell: _Cell, node_hor: Node, node_ver: Node) -> list[_Choice]:
        hor_letters = node_hor.letters
        hor_black_first = bool(hor_letters) and hor_letters[0].is_black
        start = 1 if cell.symbol == WHITE and hor_black_first else 0
        if self._sym90 and cell.sym90 < cell.index:
            target = self._cells[cell.sym90].symbol
            while start < len(hor_letters) and hor_letters[start].symbol < target:
                start += 1
        choices: list[_Choice] = []
        if node_hor is not node_ver:
            ver_letters = node_ver.letters
            if cell.symbol != BLACK:
                by_symbol = {letter.symbol: letter for letter in ver_letters}
                for hor in hor_letters[start:]:
                    ver = by_symbol.get(hor.symbol)
                    if ver is not None and self._check_letters(hor, ver):
                        choices.append(self._make_choice(hor, ver))
            elif (
                start == 0
                and hor_black_first
                and ver_letters
                and ver_letters[0].is_black
                and self._check_letters(hor_letters[0], ver_letters[0])
            ):
                choices.append(self._make_choice(hor_letters[0], ver_letters[0]))
        elif cell.symbol != BLACK:
            for letter in hor_letters[start:]:
                if self._check_letter(letter):
                    choices.append(self._make_choice(letter, letter))
        elif start == 0 and hor_black_first and self._check_letter(hor_letters[0]):
            choices.append(self._make_choice(hor_letters[0], hor_letters[0]))
        return choices

    def _order_choices(self, choices: list[_Choice]) -> None:
        if len(choices) < 2:
            return
        if self._heuristic in (Heuristic.WEIGHT, Heuristic.WEIGHTED_SHUFFLE):
            choices.sort(key=lambda ch: (ch.weight, ch.hor.symbol), reverse=True)
        elif self._heuristic is Heuristic.SHUFFLE:
            n = len(choices)
            for i in range(n):
                j = self.rng.below(n - i) + i
                choices[i], choices[j] = choices[j], choices[i]

    def _whites_delta(self, cell: _Cell) -> int:
        if not self._sym_blacks:
            return 1
        if cell.sym180 > cell.index:
            return 2
        return 1 if cell.sym180 == cell.index else 0

    def _are_whites_connected(self, target: int) -> bool:
        if not target or (self._sym_blacks and self._blacks1_n > self._blacks3_n + 2):
            return True
        cells, ct = self._cells, self._ct
        seen = {self._first_white}
        queue = [self._first_white] if cells[self._first_white].symbol != BLACK else []
        for index in queue:
            if cells[index].symbol != UNKNOWN:
                target -= 1
                if not target:
                    break
            for neighbour in (index + 1, index + ct, index - 1, index - ct):
                if neighbour not in seen and cells[neighbour].symbol != BLACK:
                    seen.add(neighbour)
                    queue.append(neighbour)
        return not target

    def _solve_cell(self, cell: _Cell, node_hor: Node, node_ver: Node):
        self._set_length_bounds(cell)
        choices = self._collect_choices(cell, node_hor, node_ver)
        if not choices:
            return 0
        self._order_choices(choices)

        cells = self._cells
        idx = cell.index
        sym = self._sym_blacks
        sym90_bak = self._sym90
        b2_row = self._blacks2[cell.row]
        b2_col = self._blacks2_cols[cell.col]
        self._b2n_rows -= b2_row
        self._b2n_cols -= b2_col
        explored = consumed = r = 0
        for choice in choices:
            if explored >= self._choices_max or r:
                break
            consumed += 1
            hor = cell.letter_hor = choice.hor
            ver = cell.letter_ver = choice.ver
            if not hor.is_black:
                end = cell.col + hor.len_max
                self._blacks2[cell.row] = 1 + self._blacks2_all_cols[end] if end < self._cols else 0
                end = cell.row + ver.len_max
                self._blacks2_cols[cell.col] = 1 + self._blacks2_all[end] if end < self._rows else 0
                self._b2n_rows += self._blacks2[cell.row]
                self._b2n_cols += self._blacks2_cols[cell.col]
                if (
                    self._blacks1_n + self._b2n_rows <= self._blacks_max
                    and self._blacks1_n + self._b2n_cols <= self._blacks_max
                ):
                    delta = self._whites_delta(cell)
                    if self._connected_whites:
                        if not self._whites_n:
                            self._first_white = idx
                        self._whites_n += delta
                    cell.symbol = hor.symbol
                    if sym and cell.sym180 > idx:
                        cells[cell.sym180].symbol = WHITE
                    hor.leaves_n -= 1
                    ver.leaves_n -= 1
                    if sym90_bak and cell.sym90 < idx:
                        self._sym90 = cell.symbol == cells[cell.sym90].symbol
                    r = yield from self._solve_grid(idx + 1)
                    explored += 1
                    ver.leaves_n += 1
                    hor.leaves_n += 1
                    if sym and cell.sym180 > idx:
                        cells[cell.sym180].symbol = UNKNOWN
                    cell.symbol = UNKNOWN if not sym or cell.sym180 >= idx else WHITE
                    if self._connected_whites:
                        self._whites_n -= delta
            else:
                self._blacks2[cell.row] = self._blacks2_all_cols[cell.col]
                self._blacks2_cols[cell.col] = self._blacks2_all[cell.row]
                self._b2n_rows += self._blacks2[cell.row]
                self._b2n_cols += self._blacks2_cols[cell.col]
                self._blacks1_n += 1
                mirror_step = 0
                if sym:
                    mirror_step = 1 if cell.sym180 > idx else -1 if cell.sym180 < idx else 0
                self._blacks3_n += mirror_step
                if (
                    self._blacks1_n + self._b2n_rows <= self._blacks_max
                    and self._blacks1_n + self._b2n_cols <= self._blacks_max
                    and (not sym or self._blacks1_n + self._blacks3_n <= self._blacks_max)
                    and (
                        not self._linear_blacks
                        or self._blacks1_n <= self._blacks_ratio * cell.pos
                    )
                ):
                    if not sym or cell.sym180 >= idx:
                        cell.symbol = BLACK
                    if sym and cell.sym180 > idx:
                        cells[cell.sym180].symbol = BLACK
                    if self._are_whites_connected(self._whites_n):
                        hor.leaves_n -= 1
                        ver.leaves_n -= 1
                        if sym90_bak and cell.sym90 < idx:
                            self._sym90 = cell.symbol == cells[cell.sym90].symbol
                        r = yield from self._solve_grid(idx + 1)
                        explored += 1
                        ver.leaves_n += 1
                        hor.leaves_n += 1
                    if sym and cell.sym180 > idx:
                        cells[cell.sym180].symbol = UNKNOWN
                    if not sym or cell.sym180 >= idx:
                        cell.symbol = UNKNOWN
                self._blacks3_n -= mirror_step
                self._blacks1_n -= 1
            self._b2n_cols -= self._blacks2_cols[cell.col]
            self._b2n_rows -= self._blacks2[cell.row]
        self._b2n_cols += b2_col
        self._b2n_rows += b2_row
        self._blacks2_cols[cell.col] = b2_col
        self._blacks2[cell.row] = b2_row
        self._sym90 = sym90_bak
        self._partial |= consumed < len(choices)
        return r