"""Scene, entities and rendering for Hush."""
