"""Save file persistence layer.

This module persists record collections as value tree files.
It powers loading, saving, and resaving for the SDK and CLI.
"""
