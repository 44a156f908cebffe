"""Infrastructure layer — filesystem I/O, content fingerprints, sentinel lock.

This layer depends on stdlib, third-party libs (filelock), and the domain
error taxonomy. It must never import from services, commands, or output.
"""
