"""Core policy resolution components."""
