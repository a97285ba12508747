"""Command-line front end for numinspect."""
