"""Infrastructure adapters: event dispatch and JSON persistence."""
