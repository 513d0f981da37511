"""Crossword grid generation from a word list by backtracking search."""

__version__ = "0.1.0"
__all__ = ["cli", "mtrand", "solver", "trie"]