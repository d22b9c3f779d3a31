"""Declarations lowered from a Go syntax tree.

The variants form a closed set discriminated by ``tag``; consumers branch on
the tag instead of inspecting syntax node kinds.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class FunctionDecl(BaseModel):
	tag: Literal["func"] = "func"
	name: str
	offset: int
	top_level: bool = True
	has_receiver: bool = False
	# Bare type name of the receiver with at most one "*" removed.
	receiver: Optional[str] = None


class StructDecl(BaseModel):
	tag: Literal["struct"] = "struct"
	name: str
	offset: int
	top_level: bool = True


class InterfaceMember(BaseModel):
	name: str
	offset: int


class InterfaceDecl(BaseModel):
	tag: Literal["interface"] = "interface"
	name: str
	offset: int
	top_level: bool = True
	members: List[InterfaceMember] = []


class ImportDecl(BaseModel):
	tag: Literal["import"] = "import"
	name: str
	offset: int
	top_level: bool = True


class OtherDecl(BaseModel):
	tag: Literal["other"] = "other"
	category: Literal["var", "const", "type-alias"]
	name: str
	offset: int
	top_level: bool = True


Decl = Annotated[
	Union[FunctionDecl, StructDecl, InterfaceDecl, ImportDecl, OtherDecl],
	Field(discriminator="tag"),
]


class ParsedFile(BaseModel):
	path: str
	package: str
	decls: List[Decl] = []
	scope: List[Decl] = []
	imports: List[ImportDecl] = []
