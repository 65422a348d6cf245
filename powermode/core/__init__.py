"""Core (front-end independent) powermode logic."""
