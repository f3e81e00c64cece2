"""flashy: spaced-repetition scheduling for flashcard decks."""

from flashy.consts import VERSION

__version__ = VERSION
