"""silkcheck: completion tracking for Hollow Knight: Silksong save files."""

__version__ = "0.1.0"
