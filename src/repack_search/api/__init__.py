"""HTTP API for Repack Search."""
