"""Runtime settings for goviz, read from the environment.

GOVIZ_ROOT      workspace root (default: $GOPATH/src, GOPATH defaulting to ~/go)
GOVIZ_HOST      address the HTTP server binds to
GOVIZ_PORT      port the HTTP server listens on
GOVIZ_LOG_LEVEL logging verbosity (DEBUG, INFO, WARNING, ERROR)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError


def default_gopath(env: Mapping[str, str]) -> Path:
	gopath = env.get("GOPATH", "")
	# Only the first GOPATH entry holds the workspace.
	first = gopath.split(os.pathsep)[0] if gopath else ""
	if first:
		return Path(first)
	return Path.home() / "go"


@dataclass
class GovizConfig:
	workspace_root: Path = field(default_factory=lambda: default_gopath(os.environ) / "src")
	host: str = "127.0.0.1"
	port: int = 8000
	log_level: str = "INFO"


def load_config(env: Optional[Mapping[str, str]] = None) -> GovizConfig:
	if env is None:
		env = os.environ
	config = GovizConfig(workspace_root=default_gopath(env) / "src")
	if env.get("GOVIZ_ROOT"):
		config.workspace_root = Path(env["GOVIZ_ROOT"])
	if env.get("GOVIZ_HOST"):
		config.host = env["GOVIZ_HOST"]
	port = env.get("GOVIZ_PORT")
	if port:
		try:
			config.port = int(port)
		except ValueError as e:
			raise ConfigError(f"GOVIZ_PORT must be an integer, got {port!r}") from e
	if env.get("GOVIZ_LOG_LEVEL"):
		level = env["GOVIZ_LOG_LEVEL"].upper()
		if not isinstance(logging.getLevelName(level), int):
			raise ConfigError(f"GOVIZ_LOG_LEVEL must be a logging level name, got {level!r}")
		config.log_level = level
	config.workspace_root = config.workspace_root.expanduser().absolute()
	return config
