"""Minimal Go package introspection.

Decides whether a directory is an importable Go package and, if so, what
its package name is, following the file selection rules of go/build:
test files, files starting with "_" or ".", files excluded by their
GOOS/GOARCH name suffix or by build constraints, and "documentation"
packages do not count.
"""

from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel

from .constraints import BuildContext, host_context, match_file_name, should_build
from .errors import BuildError, MultiplePackageError, NoGoError
from .go_parse import package_name, parse_tree

EXECUTABLE_PACKAGE = "main"


class GoPackage(BaseModel):
	name: str
	dir: str
	go_files: List[str] = []

	@property
	def is_command(self) -> bool:
		return self.name == EXECUTABLE_PACKAGE


def _is_candidate(filename: str) -> bool:
	if not filename.endswith(".go") or filename.endswith("_test.go"):
		return False
	return not filename.startswith(("_", "."))


def import_dir(directory: str, context: Optional[BuildContext] = None) -> GoPackage:
	"""Resolve ``directory`` as a Go package for ``context`` (default: host).

	Raises NoGoError, MultiplePackageError or BuildError when the directory
	does not hold exactly one buildable package.
	"""
	if context is None:
		context = host_context()
	try:
		entries = [
			e for e in os.scandir(directory)
			if e.is_file() and _is_candidate(e.name) and match_file_name(e.name, context)
		]
	except OSError as e:
		raise BuildError(f"cannot read {directory}: {e}") from e

	names: List[str] = []
	files: List[str] = []
	for entry in entries:
		try:
			with open(entry.path, "rb") as fh:
				source = fh.read()
		except OSError as e:
			raise BuildError(f"cannot read {entry.path}: {e}") from e
		if not should_build(source, context):
			continue
		name = package_name(source, parse_tree(source))
		if name is None:
			raise BuildError(f"{entry.path}: expected 'package'")
		if name == "documentation":
			continue
		names.append(name)
		files.append(entry.name)

	if not names:
		raise NoGoError(directory)
	if len(set(names)) > 1:
		first = names[0]
		other = next(i for i, n in enumerate(names) if n != first)
		raise MultiplePackageError(directory, [first, names[other]], [files[0], files[other]])
	return GoPackage(name=names[0], dir=directory, go_files=files)
