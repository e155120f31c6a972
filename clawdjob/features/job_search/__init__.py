"""Job search, scoring and the hunt cycle."""
