"""Report domain objects."""
