"""L3 Synthesis — command rendering, reporting and script output."""
