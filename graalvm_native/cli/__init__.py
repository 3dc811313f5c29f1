"""Command line interface for the native-image builder."""
