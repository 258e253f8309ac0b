"""Regional vehicle tax engine for Belgian car buyers."""
