"""Command-line surfaces for command-order."""
