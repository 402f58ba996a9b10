"""Domain layer — values, documents, and the corpus index.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
