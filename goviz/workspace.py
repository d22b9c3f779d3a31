from __future__ import annotations

import os
import stat
from typing import List, Optional

from .analyzer import analyze_source_file
from .errors import NotFoundError, OutsideWorkspaceError
from .fs_scan import is_source_file, list_directory
from .model import Node


def _within(root: str, path: str) -> bool:
	return os.path.commonpath([root, path]) == root


def resolve_target(root: str, relative: Optional[str] = None) -> str:
	"""Join ``relative`` onto ``root``, refusing paths that leave the root.

	Both the joined path and its symlink-resolved form must stay below the
	root.
	"""
	root = os.path.normpath(os.path.abspath(root))
	if not relative:
		return root
	if "\x00" in relative:
		raise NotFoundError(f"invalid target {relative!r}: embedded null byte")
	target = os.path.normpath(os.path.join(root, relative.lstrip("/" + os.sep)))
	if not _within(root, target) or not _within(os.path.realpath(root), os.path.realpath(target)):
		raise OutsideWorkspaceError(f"{relative!r} is outside the workspace {root}")
	return target


def navigate(root: str, relative: Optional[str] = None, receiver: Optional[str] = None) -> List[Node]:
	"""Describe the directory or Go file at ``relative`` below ``root``.

	Files that are neither directories nor Go sources yield no nodes.
	"""
	target = resolve_target(root, relative)
	try:
		info = os.stat(target)
	except (OSError, ValueError) as e:
		raise NotFoundError(f"stat {target}: {getattr(e, 'strerror', None) or e}") from e

	if stat.S_ISDIR(info.st_mode):
		return list_directory(root, target)
	if stat.S_ISREG(info.st_mode) and is_source_file(target):
		return analyze_source_file(root, target, receiver or None)
	return []
