"""Core feed pipeline: models, primitives, storage and services."""
