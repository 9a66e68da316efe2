"""Cross-cutting configuration, errors, logging and wiring."""
