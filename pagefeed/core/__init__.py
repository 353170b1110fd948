"""Cross-cutting infrastructure: settings, logging, connectivity."""
