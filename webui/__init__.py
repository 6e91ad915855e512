"""Flask web UI for the vinyl collection browser."""
