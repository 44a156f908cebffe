"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Owns logging setup, the lazily built ManifestService,
and result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from mtactl.config.logging import configure_logging
from mtactl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from mtactl.config.settings import MtaSettings
    from mtactl.services.manifest import ManifestService
    from mtactl.services.result import ServiceResult

logger = logging.getLogger("mtactl.commands")


class AppContext:
    """Per-invocation state flowing through Click's command hierarchy."""

    def __init__(self, settings: MtaSettings) -> None:
        self.settings = settings
        self._service: ManifestService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ManifestService:
        """The manifest service (created on first access)."""
        if self._service is None:
            from mtactl.services.manifest import ManifestService

            self._service = ManifestService(self.settings.mutation)
        return self._service

    def manifest_path(self, path: str | None) -> Path:
        """Resolve a ``--path`` value against the configured default."""
        return self.settings.resolve_manifest(path)

    def emit(self, result: ServiceResult) -> None:
        """Output *result* with the right stream and exit code.

        * Success: stdout, normal return. Warnings go to stderr outside
          JSON mode, where they are already part of the payload.
        * Failure: the error is logged, the rendering goes to stderr,
          and the process exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        if result.error is not None:
            logger.error("%s failed: %s", result.op, result.error.message)
        click.echo(output, err=True)
        raise SystemExit(1)
