"""kioku: spaced-repetition review scheduling for vocabulary flashcards."""

from kioku.consts import VERSION

__version__ = VERSION
