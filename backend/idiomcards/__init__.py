"""Smart Idiom Cards - note-to-flashcard extraction and spaced-repetition review."""

__version__ = "0.1.0"
