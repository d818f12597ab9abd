"""HTTP API: routes mounted under /api."""
