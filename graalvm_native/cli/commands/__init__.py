"""CLI commands for the native-image builder."""
