"""goviz: structural index of a Go workspace for the workspace visualizer.

Modules:
- workspace.py: Entry point; resolves a target below the root and dispatches.
- fs_scan.py: Directory listing and filesystem node classification.
- go_build.py: Go package introspection of directories.
- constraints.py: Go build constraints and file name platform rules.
- go_parse.py: tree-sitter parsing of Go files into declarations.
- symbols.py: Declaration and receiver-method nodes from a parsed file.
- model.py: The Node record and its JSON encoding.
"""

__all__ = [
	"workspace",
	"fs_scan",
	"go_build",
	"constraints",
	"go_parse",
	"symbols",
	"model",
]
