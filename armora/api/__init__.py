"""Armora HTTP API — FastAPI app exposing matching and pricing."""
