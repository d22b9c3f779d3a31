from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic_core import PydanticSerializationError

from .errors import SerializationError


class NodeType(str, Enum):
	TOP_LEVEL = "topLevel"
	FOLDER = "folder"
	COMPILABLE_UNIT = "package"
	EXECUTABLE_UNIT = "program"
	SOURCE_FILE = "source"
	DECLARATION = "object"


class Node(BaseModel):
	"""Flat record describing a filesystem entry or a Go declaration.

	Fields serialize under the capitalized names the visualizer reads.
	"""

	model_config = ConfigDict(populate_by_name=True)

	type: NodeType = Field(alias="Type")
	kind: Optional[str] = Field(default=None, alias="Kind")
	name: str = Field(default="", alias="Name")
	loc: str = Field(default="", alias="Loc")
	dir: str = Field(default="", alias="Dir")
	id: str = Field(alias="Id")
	label: str = Field(default="", alias="Label")
	value: Optional[int] = Field(default=None, alias="Value")


_NODE_LIST = TypeAdapter(List[Node])


def encode_nodes(nodes: List[Node]) -> bytes:
	"""Encode nodes as an indented JSON array."""
	try:
		return _NODE_LIST.dump_json(nodes, indent=2, by_alias=True)
	except PydanticSerializationError as e:
		raise SerializationError(f"encoding {len(nodes)} nodes failed: {e}") from e
