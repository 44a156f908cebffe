"""mtactl — concurrency-safe editing of MTA deployment manifests."""

__version__ = "0.1.0"
