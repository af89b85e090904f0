"""Format-specific statement parsers. Each one is pure and never raises on bad input."""
