"""Command line interface for sealedenv."""
