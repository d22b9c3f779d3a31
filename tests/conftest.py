from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest


def write(path: Path, text: str) -> Path:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(dedent(text).lstrip("\n"))
	return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
	"""A small $GOPATH/src tree.

	src/
	  hello/main.go               package main
	  top.go
	  README.md
	  .cache/
	  acme/
	    acme.go                   package acme
	    notes.txt
	    .hidden.go
	    .git/
	    docs/README.md
	    lib/lib.go                package lib
	    lib/lib_test.go           package lib_test
	    cmd/tool/main.go          package main
	"""
	root = tmp_path / "src"
	write(root / "hello" / "main.go", """
		package main

		import "fmt"

		func main() { fmt.Println("hello") }
		""")
	write(root / "top.go", "package top\n")
	write(root / "README.md", "# workspace\n")
	(root / ".cache").mkdir()

	acme = root / "acme"
	write(acme / "acme.go", """
		package acme

		const Version = "1.0"
		""")
	write(acme / "notes.txt", "not go\n")
	write(acme / ".hidden.go", "package acme\n")
	(acme / ".git").mkdir()
	write(acme / "docs" / "README.md", "docs\n")
	write(acme / "lib" / "lib.go", """
		package lib

		func Do() {}
		""")
	write(acme / "lib" / "lib_test.go", "package lib_test\n")
	write(acme / "cmd" / "tool" / "main.go", """
		package main

		func main() {}
		""")
	return root
