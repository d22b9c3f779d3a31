"""Turn lowered Go declarations into declaration nodes.

Two modes exist. Extraction lists the package scope followed by the
imports. Receiver resolution lists the methods bound to one named type,
including the explicitly named methods of an interface with that name.
"""

from __future__ import annotations

from typing import List, Optional

from .decls import Decl, ImportDecl, ParsedFile
from .model import Node, NodeType


def _declaration(kind: str, label: str, name: str, offset: int, dir: str, loc: str) -> Node:
	return Node(
		id=str(offset),
		label=f"{label}\n{name}",
		type=NodeType.DECLARATION,
		kind=kind,
		name=name,
		dir=dir,
		loc=loc,
	)


def classify_scope_decl(decl: Decl, dir: str, loc: str) -> Optional[Node]:
	if decl.tag in ("struct", "interface", "func"):
		kind = decl.tag
	elif decl.tag == "other":
		kind = decl.category
	else:
		return None
	return _declaration(kind, kind, decl.name, decl.offset, dir, loc)


def import_node(decl: ImportDecl, dir: str, loc: str) -> Node:
	return Node(
		id=decl.name,
		label=decl.name,
		type=NodeType.DECLARATION,
		kind="import",
		name=decl.name,
		dir=dir,
		loc=loc,
	)


def extract_symbols(parsed: ParsedFile, dir: str, loc: str) -> List[Node]:
	nodes: List[Node] = []
	for decl in parsed.scope:
		node = classify_scope_decl(decl, dir, loc)
		if node is not None:
			nodes.append(node)

	imported = set()
	for decl in parsed.imports:
		# Importing one path twice under two names yields one node.
		if decl.name in imported:
			continue
		imported.add(decl.name)
		nodes.append(import_node(decl, dir, loc))
	return nodes


def classify_receiver_decl(decl: Decl, receiver: str, dir: str, loc: str) -> List[Node]:
	if decl.tag == "func" and decl.has_receiver and decl.receiver == receiver:
		return [_declaration("method", "method", decl.name, decl.offset, dir, loc)]
	if decl.tag == "interface" and decl.name == receiver:
		return [
			_declaration("method", "interface-method", member.name, member.offset, dir, loc)
			for member in decl.members
		]
	return []


def resolve_receiver(parsed: ParsedFile, receiver: str, dir: str, loc: str) -> List[Node]:
	nodes: List[Node] = []
	for decl in parsed.decls:
		nodes.extend(classify_receiver_decl(decl, receiver, dir, loc))
	return nodes
