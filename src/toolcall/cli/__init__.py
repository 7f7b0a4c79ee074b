"""Command-line interface for toolcall."""
