"""L2 Resolver — snapshot loading and per-app source resolution."""
