"""Core build pipeline for the native-image builder."""
