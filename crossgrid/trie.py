"""Word trie used to fill crossword grids, with its dictionary loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike

BLACK = "#"


class DictionaryError(Exception):
    """Raised when a dictionary cannot be read or is malformed."""


@dataclass(eq=False, repr=False)
class Letter:
    """An edge of the trie: a symbol leading to the next node.

    A black symbol always leads back to the root node, so a run of
    letters followed by a black square spells a complete word.
    """

    symbol: str
    next_node: Node
    leaves_n: int = 0
    len_min: int = 0
    len_max: int = 0

    @property
    def is_black(self) -> bool:
        return self.symbol == BLACK

    def __repr__(self) -> str:
        return (
            f"Letter({self.symbol!r}, leaves_n={self.leaves_n}, "
            f"len_min={self.len_min}, len_max={self.len_max})"
        )


@dataclass(eq=False, repr=False)
class Node:
    """A trie node holding the letters that may follow."""

    letters: list[Letter] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Node({[letter.symbol for letter in self.letters]!r})"


class Trie:
    """Trie of dictionary words, each word terminated by a black symbol."""

    def __init__(self) -> None:
        self.root = Node()
        self.root_letter = Letter(BLACK, self.root)

    def _descend(self, node: Node, symbol: str) -> Node:
        for letter in reversed(node.letters):
            if letter.symbol == symbol:
                return letter.next_node
        next_node = self.root if symbol == BLACK else Node()
        node.letters.append(Letter(symbol, next_node))
        return next_node

    def add_word(self, word: str) -> None:
        """Insert a word of ASCII letters; the empty word marks adjacent blacks."""
        normalized = word.upper()
        if not all("A" <= ch <= "Z" for ch in normalized):
            raise DictionaryError(f"Invalid word {word!r} in dictionary")
        node = self.root
        for symbol in normalized:
            node = self._descend(node, symbol)
        self._descend(node, BLACK)

    def annotate(
        self, rows: int, cols: int, blacks_max: int, iterative_choices: bool
    ) -> int:
        """Sort letters and compute leaf counts and word-length bounds.

        Returns the initial maximum number of choices explored per cell.
        """
        choices_max = 1
        root_leaves = rows + cols + blacks_max * 2

        def visit(letter: Letter, node: Node) -> None:
            nonlocal choices_max
            letter.leaves_n = 0
            letter.len_min = cols
            letter.len_max = 0
            for child in reversed(node.letters):
                if child.next_node is not self.root:
                    visit(child, child.next_node)
                    child.len_min += 1
                    child.len_max += 1
                else:
                    child.leaves_n = 1 if letter is not self.root_letter else root_leaves
                    child.len_min = 0
                    child.len_max = 0
                letter.leaves_n += child.leaves_n
                letter.len_min = min(letter.len_min, child.len_min)
                letter.len_max = max(letter.len_max, child.len_max)
            node.letters.sort(key=lambda item: item.symbol)
            if not iterative_choices and len(node.letters) > choices_max:
                choices_max = len(node.letters)

        visit(self.root_letter, self.root)
        return choices_max


def parse_dictionary(text: str, rows: int, cols: int, blacks_max: int) -> Trie:
    """Build a trie from newline-terminated words usable in the grid.

    With black squares allowed, every word up to ``cols`` letters is kept;
    otherwise only words exactly ``rows`` or ``cols`` letters long.
    """
    trie = Trie()
    word: list[str] = []
    length = 0
    for ch in text:
        symbol = ch.upper() if "a" <= ch <= "z" else ch
        if "A" <= symbol <= "Z":
            if length < cols:
                word.append(symbol)
            length += 1
        elif ch == "\n":
            if (blacks_max and length <= cols) or length in (rows, cols):
                trie.add_word("".join(word))
            word.clear()
            length = 0
        else:
            raise DictionaryError(f"Invalid character {ch} in dictionary")
    if length:
        raise DictionaryError("Unexpected end of dictionary")
    if blacks_max:
        trie.add_word("")
    return trie


def load_dictionary(
    path: str | PathLike[str], rows: int, cols: int, blacks_max: int
) -> Trie:
    """Read a dictionary file and build its trie."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise DictionaryError("Could not open the dictionary") from exc
    return parse_dictionary(data.decode("latin-1"), rows, cols, blacks_max)