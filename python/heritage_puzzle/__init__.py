"""Vietnam Puzzle Heritage: sliding picture puzzles with historical campaigns."""

__version__ = "0.1.0"
