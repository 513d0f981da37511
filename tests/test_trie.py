import pytest

from crossgrid.trie import (
    BLACK,
    DictionaryError,
    Trie,
    load_dictionary,
    parse_dictionary,
)


def collect_words(trie):
    found = set()
    stack = [(trie.root, "")]
    while stack:
        node, prefix = stack.pop()
        for letter in node.letters:
            if letter.symbol == BLACK:
                found.add(prefix)
            else:
                stack.append((letter.next_node, prefix + letter.symbol))
    return found


def all_nodes(trie):
    seen = []
    stack = [trie.root]
    while stack:
        node = stack.pop()
        seen.append(node)
        for letter in node.letters:
            if letter.next_node is not trie.root:
                stack.append(letter.next_node)
    return seen


def test_exact_length_words_only_without_blacks():
    trie = parse_dictionary("AB\nABC\nABCD\nXY\n", 2, 4, 0)
    assert collect_words(trie) == {"AB", "ABCD", "XY"}


def test_words_up_to_width_with_blacks():
    trie = parse_dictionary("A\nAB\nABC\nABCDE\n", 2, 4, 3)
    assert collect_words(trie) == {"", "A", "AB", "ABC"}


def test_lowercase_is_folded():
    trie = parse_dictionary("cat\nDog\n", 3, 3, 0)
    assert collect_words(trie) == {"CAT", "DOG"}


def test_empty_line_adds_black_at_root_only_with_blacks():
    assert "" in collect_words(parse_dictionary("\nAB\n", 2, 2, 1))
    assert "" not in collect_words(parse_dictionary("\nAB\n", 2, 2, 0))


def test_blacks_always_give_root_a_black_letter():
    trie = parse_dictionary("AB\n", 2, 2, 1)
    assert [letter.symbol for letter in trie.root.letters if letter.is_black] == [BLACK]


def test_black_letters_lead_back_to_root():
    trie = parse_dictionary("AB\nAC\n", 2, 2, 1)
    for node in all_nodes(trie):
        for letter in node.letters:
            if letter.is_black:
                assert letter.next_node is trie.root


def test_invalid_character_raises():
    with pytest.raises(DictionaryError, match="Invalid character 1"):
        parse_dictionary("AB\nA1\n", 2, 2, 0)


def test_carriage_return_is_invalid():
    with pytest.raises(DictionaryError, match="Invalid character"):
        parse_dictionary("AB\r\n", 2, 2, 0)


def test_missing_final_newline_raises():
    with pytest.raises(DictionaryError, match="Unexpected end of dictionary"):
        parse_dictionary("AB\nCD", 2, 2, 0)


def test_shared_prefixes_are_merged():
    trie = parse_dictionary("AB\nAC\nAB\n", 2, 2, 0)
    assert [letter.symbol for letter in trie.root.letters] == ["A"]
    assert collect_words(trie) == {"AB", "AC"}


def test_add_word_rejects_non_letters():
    with pytest.raises(DictionaryError):
        Trie().add_word("A-B")


def test_add_word_uppercases():
    trie = Trie()
    trie.add_word("xy")
    assert collect_words(trie) == {"XY"}


def test_annotate_sorts_letters():
    trie = parse_dictionary("ZA\nMA\nAA\n", 2, 2, 1)
    trie.annotate(2, 2, 1, False)
    for node in all_nodes(trie):
        symbols = [letter.symbol for letter in node.letters]
        assert symbols == sorted(symbols)
    assert trie.root.letters[0].symbol == BLACK


def test_annotate_counts_leaves_and_lengths():
    words = ["AB", "AC", "BA"]
    trie = parse_dictionary("".join(w + "\n" for w in words), 2, 2, 0)
    trie.annotate(2, 2, 0, False)
    assert trie.root_letter.leaves_n == len(words)
    assert trie.root_letter.len_min == len("AB")
    assert trie.root_letter.len_max == len("AB")
    first = trie.root.letters[0]
    assert first.symbol == "A"
    assert first.leaves_n == len(["AB", "AC"])


def test_annotate_length_bounds_with_mixed_lengths():
    trie = parse_dictionary("A\nABC\n", 3, 3, 1)
    trie.annotate(3, 3, 1, False)
    a_letter = next(l for l in trie.root.letters if l.symbol == "A")
    assert a_letter.len_min == len("A")
    assert a_letter.len_max == len("ABC")


def test_root_black_leaves_depend_on_grid():
    rows, cols, blacks_max = 3, 4, 5
    trie = parse_dictionary("ABC\n", rows, cols, blacks_max)
    trie.annotate(rows, cols, blacks_max, False)
    black = trie.root.letters[0]
    assert black.is_black
    assert black.leaves_n == rows + cols + blacks_max * 2
    assert black.len_min == 0 and black.len_max == 0


def test_annotate_choices_max_is_widest_node():
    trie = parse_dictionary("AB\nAC\nAD\n", 2, 2, 0)
    widest = max(len(node.letters) for node in all_nodes(trie))
    assert trie.annotate(2, 2, 0, False) == widest


def test_annotate_iterative_choices_starts_at_one():
    trie = parse_dictionary("AB\nAC\nAD\n", 2, 2, 0)
    assert trie.annotate(2, 2, 0, True) == 1


def test_load_dictionary_from_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_bytes(b"cat\nDOG\nhorse\n")
    trie = load_dictionary(path, 3, 3, 0)
    assert collect_words(trie) == {"CAT", "DOG"}


def test_load_dictionary_missing_file(tmp_path):
    with pytest.raises(DictionaryError, match="Could not open the dictionary"):
        load_dictionary(tmp_path / "absent.txt", 2, 2, 0)


def test_load_dictionary_rejects_non_ascii(tmp_path):
    path = tmp_path / "words.txt"
    path.write_bytes("CAF\u00c9\n".encode("latin-1"))
    with pytest.raises(DictionaryError, match="Invalid character"):
        load_dictionary(path, 4, 4, 0)