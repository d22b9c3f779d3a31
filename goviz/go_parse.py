from __future__ import annotations

from typing import Dict, Iterator, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node as SyntaxNode, Parser

from .decls import (
	Decl,
	FunctionDecl,
	ImportDecl,
	InterfaceDecl,
	InterfaceMember,
	OtherDecl,
	ParsedFile,
	StructDecl,
)
from .errors import ParseError


GO_LANGUAGE = Language(tree_sitter_go.language())

# method_spec is the pre-generics grammar's name for method_elem.
_INTERFACE_METHOD_NODES = ("method_elem", "method_spec")


def parse_tree(source: bytes) -> SyntaxNode:
	"""Parse Go source and return the root syntax node, errors included."""
	return Parser(GO_LANGUAGE).parse(source).root_node


def _text(source: bytes, node: SyntaxNode) -> str:
	return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _walk(root: SyntaxNode) -> Iterator[SyntaxNode]:
	# Depth-first, pre-order, same visiting order as go/ast.Inspect.
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(node.children))


def _position(node: SyntaxNode) -> str:
	row, column = node.start_point[0], node.start_point[1]
	return f"{row + 1}:{column + 1}"


def syntax_error(source: bytes, root: SyntaxNode) -> Optional[str]:
	"""Describe the first syntax error in the tree, or None if it is clean."""
	if not root.has_error:
		return None
	for node in _walk(root):
		if node.is_missing:
			return f"{_position(node)}: expected {node.type!r}"
		if node.type == "ERROR":
			found = _text(source, node).strip().splitlines()
			snippet = found[0][:20] if found else "EOF"
			return f"{_position(node)}: unexpected {snippet!r}"
	return f"{_position(root)}: syntax error"


_TOP_LEVEL_DECLARATIONS = (
	"function_declaration",
	"method_declaration",
	"type_declaration",
	"var_declaration",
	"const_declaration",
)


def structure_error(root: SyntaxNode) -> Optional[str]:
	"""Check the file layout: package clause, then imports, then declarations."""
	seen_package = False
	seen_declaration = False
	for child in root.named_children:
		if child.type == "comment":
			continue
		if child.type == "package_clause":
			if seen_package or seen_declaration:
				return f"{_position(child)}: expected declaration, found 'package'"
			seen_package = True
			continue
		if not seen_package:
			return f"{_position(child)}: expected 'package'"
		if child.type == "import_declaration":
			if seen_declaration:
				return f"{_position(child)}: imports must appear before other declarations"
			continue
		if child.type not in _TOP_LEVEL_DECLARATIONS:
			return f"{_position(child)}: non-declaration statement outside function body"
		seen_declaration = True
	if not seen_package:
		return "1:1: expected 'package'"
	return None


def package_name(source: bytes, root: SyntaxNode) -> Optional[str]:
	for child in root.named_children:
		if child.type == "package_clause":
			for ident in child.named_children:
				if ident.type == "package_identifier":
					return _text(source, ident)
			return None
		if child.type != "comment":
			return None
	return None


def _is_package_level(node: SyntaxNode) -> bool:
	cursor = node
	while cursor is not None and not cursor.type.endswith("_declaration"):
		cursor = cursor.parent
	return cursor is not None and cursor.parent is not None and cursor.parent.type == "source_file"


def _receiver_type(source: bytes, method: SyntaxNode) -> Optional[str]:
	params = method.child_by_field_name("receiver")
	if params is None:
		return None
	for param in params.named_children:
		if param.type != "parameter_declaration":
			continue
		typ = param.child_by_field_name("type")
		if typ is not None and typ.type == "pointer_type":
			inner = [c for c in typ.named_children if c.type != "comment"]
			typ = inner[0] if inner else None
		if typ is not None and typ.type == "type_identifier":
			return _text(source, typ)
	return None


def _interface_members(source: bytes, iface: SyntaxNode) -> List[InterfaceMember]:
	members: List[InterfaceMember] = []
	for child in iface.named_children:
		if child.type not in _INTERFACE_METHOD_NODES:
			continue
		name = child.child_by_field_name("name")
		if name is None:
			continue
		members.append(InterfaceMember(name=_text(source, name), offset=name.start_byte))
	return members


def _named(node: SyntaxNode, kind: str) -> List[SyntaxNode]:
	return [n for n in node.children_by_field_name("name") if n.type == kind]


def lower_node(source: bytes, node: SyntaxNode) -> List[Decl]:
	"""Turn one syntax node into the declarations it introduces, if any."""
	if node.type == "function_declaration":
		name = node.child_by_field_name("name")
		if name is None:
			return []
		return [FunctionDecl(name=_text(source, name), offset=name.start_byte, top_level=_is_package_level(node))]

	if node.type == "method_declaration":
		name = node.child_by_field_name("name")
		if name is None:
			return []
		return [
			FunctionDecl(
				name=_text(source, name),
				offset=name.start_byte,
				top_level=_is_package_level(node),
				has_receiver=True,
				receiver=_receiver_type(source, node),
			)
		]

	if node.type in ("type_spec", "type_alias"):
		name = node.child_by_field_name("name")
		if name is None:
			return []
		body = node.child_by_field_name("type")
		fields = dict(name=_text(source, name), offset=name.start_byte, top_level=_is_package_level(node))
		if body is not None and body.type == "interface_type":
			return [InterfaceDecl(members=_interface_members(source, body), **fields)]
		if body is not None and body.type == "struct_type":
			return [StructDecl(**fields)]
		return [OtherDecl(category="type-alias", **fields)]

	if node.type in ("var_spec", "const_spec"):
		category = "var" if node.type == "var_spec" else "const"
		top_level = _is_package_level(node)
		return [
			OtherDecl(category=category, name=_text(source, ident), offset=ident.start_byte, top_level=top_level)
			for ident in _named(node, "identifier")
		]

	if node.type == "import_spec":
		path = node.child_by_field_name("path")
		if path is None:
			return []
		return [ImportDecl(name=_text(source, path)[1:-1], offset=path.start_byte)]

	return []


def _declares(decl: Decl) -> bool:
	# Mirrors what the go/parser resolver inserts into the file scope.
	if not decl.top_level or decl.tag == "import" or decl.name == "_":
		return False
	if decl.tag == "func":
		return not decl.has_receiver and decl.name != "init"
	return True


def parse_go_source(path: str, source: bytes) -> ParsedFile:
	"""Parse a Go file into its lowered declarations.

	Raises ParseError on any syntax error, a missing or repeated package
	clause, a late import or a statement at package level; no
	partial result is ever returned.
	"""
	root = parse_tree(source)
	problem = syntax_error(source, root) or structure_error(root)
	if problem is not None:
		raise ParseError(path, problem)
	package = package_name(source, root)
	if package is None:
		raise ParseError(path, "1:1: expected 'package'")

	decls: List[Decl] = []
	for node in _walk(root):
		decls.extend(lower_node(source, node))

	scope: Dict[str, Decl] = {}
	for decl in decls:
		if _declares(decl):
			scope.setdefault(decl.name, decl)

	return ParsedFile(
		path=path,
		package=package,
		decls=decls,
		scope=list(scope.values()),
		imports=[d for d in decls if d.tag == "import"],
	)
