"""L1 Domain — pure helpers: templating, ranking, install methods."""
