"""Controller watch helpers."""
