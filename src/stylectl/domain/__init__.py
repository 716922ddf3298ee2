"""Domain layer — entry points, extensions, and module encoding.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
