"""Game data: unlock resolution, the catalog and completion scoring."""
