"""HTTP API layer: routes and response envelopes."""
