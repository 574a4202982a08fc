"""Command line interface for github-merge-bot."""
