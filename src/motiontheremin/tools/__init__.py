"""Development helpers (debug switches and timing instrumentation)."""
