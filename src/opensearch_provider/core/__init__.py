"""Core pipeline: XML parsing, normalization, template compilation and request building."""
