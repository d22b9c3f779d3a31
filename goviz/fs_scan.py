from __future__ import annotations

import logging
import os
from typing import List

from .errors import BuildError, ListError
from .go_build import import_dir
from .model import Node, NodeType


logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".go"
HIDDEN_PREFIX = "."


def is_hidden(name: str) -> bool:
	return name.startswith(HIDDEN_PREFIX)


def is_source_file(filename: str) -> bool:
	_, ext = os.path.splitext(filename)
	return ext == SOURCE_EXTENSION


def classify_directory(path: str) -> NodeType:
	try:
		pkg = import_dir(path)
	except BuildError as e:
		logger.debug("Not a Go package, listing as folder: %s", e)
		return NodeType.FOLDER
	if pkg.is_command:
		return NodeType.EXECUTABLE_UNIT
	return NodeType.COMPILABLE_UNIT


def list_directory(root: str, directory: str) -> List[Node]:
	"""List the immediate children of ``directory`` as filesystem nodes.

	Hidden entries and non-Go files are omitted. Entries keep the order the
	directory read returns them in.
	"""
	root = os.path.abspath(root)
	directory = os.path.abspath(directory)
	try:
		entries = list(os.scandir(directory))
	except OSError as e:
		raise ListError(f"reading {directory} failed: {e}") from e

	nodes: List[Node] = []
	for entry in entries:
		if is_hidden(entry.name):
			continue
		try:
			is_dir = entry.is_dir(follow_symlinks=False)
			size = 0 if is_dir else entry.stat(follow_symlinks=False).st_size
		except OSError as e:
			raise ListError(f"reading {entry.path} failed: {e}") from e
		if not is_dir and not is_source_file(entry.name):
			continue

		path = os.path.join(directory, entry.name)
		if directory == root:
			typ = NodeType.TOP_LEVEL
		elif is_dir:
			typ = classify_directory(path)
		else:
			typ = NodeType.SOURCE_FILE

		nodes.append(
			Node(
				id=path,
				label=entry.name,
				name=entry.name,
				value=size,
				loc=os.path.relpath(path, root),
				dir=directory,
				type=typ,
			)
		)
	return nodes
