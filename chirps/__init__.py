"""chirps/ -- Chirp domain model, word filter and persistence."""
