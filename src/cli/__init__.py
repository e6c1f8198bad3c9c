"""Command line interface for inspecting and rewriting saves."""
