"""Poet's Pal: rhyme, prefix and synonym lookups backed by Datamuse."""

__version__ = "0.1.0"
