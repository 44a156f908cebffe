"""Service layer — manifest operations and the mutation pipeline.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
