"""Hash table, byte builder, game clock, card entities, texture formats and undo for a solitaire game."""

__version__ = "0.1.0"