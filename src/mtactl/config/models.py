"""Pydantic configuration section models with code-baked defaults.

Sparse TOML contract: defaults live here, ``mtactl.toml`` only carries
overrides, e.g.::

    [mutation]
    enforce_check = false
"""

from __future__ import annotations

from pydantic import BaseModel


class MutationConfig(BaseModel):
    """[mutation] section — mutation pipeline policy."""

    model_config = {"frozen": True}

    # Default for ``add --check/--no-check`` when the flag is omitted.
    enforce_check: bool = True
    lock_filename: str = "mta-lock.lock"


class ManifestConfig(BaseModel):
    """[manifest] section."""

    model_config = {"frozen": True}

    # Used when a command is invoked without ``--path``.
    default_path: str = "mta.yaml"
