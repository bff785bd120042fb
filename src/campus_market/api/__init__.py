"""HTTP API for the campus marketplace."""
