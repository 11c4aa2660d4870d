"""tokenum - count language-model tokens for files, strings and directory trees."""

__version__ = "0.1.0"
