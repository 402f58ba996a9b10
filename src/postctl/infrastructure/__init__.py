"""Infrastructure layer — post store access, loading, and site config.

This layer depends on stdlib and third-party libs (ruamel.yaml).
It may import from the domain and config layers, never from services,
commands, or output.
"""
