"""L4 Orchestration — request-level entry points."""
