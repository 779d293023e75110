"""Core helpers for poclean: XDG paths and console theming."""
