"""Domain layer — manifest models, name rules, and the error taxonomy.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
