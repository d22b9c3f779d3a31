"""Exception hierarchy for goviz.

Every failure raised by the navigator derives from GovizError so the
transport can map any of them to a single error response.
"""

from __future__ import annotations

from typing import List


class GovizError(Exception):
	"""Base exception for all goviz errors."""


class ConfigError(GovizError):
	"""Invalid configuration value in the environment."""


class NotFoundError(GovizError):
	"""The requested target cannot be stat'ed."""


class OutsideWorkspaceError(GovizError):
	"""The requested target resolves outside the workspace root."""


class ListError(GovizError):
	"""A directory's contents cannot be read."""


class ReadError(GovizError):
	"""A source file cannot be read."""


class ParseError(GovizError):
	"""Go source text has syntax errors."""

	def __init__(self, path: str, diagnostic: str) -> None:
		super().__init__(f"{path}:{diagnostic}")
		self.path = path
		self.diagnostic = diagnostic


class SerializationError(GovizError):
	"""Nodes could not be encoded for the response."""


class BuildError(GovizError):
	"""A directory is not an importable Go package."""


class NoGoError(BuildError):
	"""No buildable Go source files in a directory."""

	def __init__(self, directory: str) -> None:
		super().__init__(f"no buildable Go source files in {directory}")
		self.directory = directory


class MultiplePackageError(BuildError):
	"""Go files in one directory declare different packages."""

	def __init__(self, directory: str, packages: List[str], files: List[str]) -> None:
		found = ", ".join(f"{p} ({f})" for p, f in zip(packages, files))
		super().__init__(f"found packages {found} in {directory}")
		self.directory = directory
		self.packages = packages
		self.files = files
