from __future__ import annotations

import os
from typing import List, Optional

from .errors import ReadError
from .go_parse import parse_go_source
from .model import Node
from .symbols import extract_symbols, resolve_receiver


def analyze_source_file(root: str, path: str, receiver: Optional[str] = None) -> List[Node]:
	"""Parse one Go file and describe it.

	Without ``receiver`` the package-level declarations and imports are
	returned; with it, the methods bound to that type name.
	"""
	path = os.path.abspath(path)
	try:
		with open(path, "rb") as fh:
			source = fh.read()
	except OSError as e:
		raise ReadError(f"reading {path} failed: {e}") from e

	parsed = parse_go_source(path, source)
	loc = os.path.relpath(path, os.path.abspath(root))
	if receiver:
		return resolve_receiver(parsed, receiver, path, loc)
	return extract_symbols(parsed, path, loc)
