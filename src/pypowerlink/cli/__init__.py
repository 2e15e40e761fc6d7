"""Command-line tools for pypowerlink."""
