"""Command line interface for solid-invoice."""
