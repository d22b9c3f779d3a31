from textwrap import dedent

import pytest

from goviz.errors import ParseError
from goviz.go_parse import parse_go_source


def parse(code: str):
	source = dedent(code).lstrip("\n").encode("utf-8")
	return source, parse_go_source("/ws/src/p/p.go", source)


def test_package_scope_in_source_order():
	source, parsed = parse(
		"""
		package p

		import (
			"fmt"
			"strings"
		)

		type Shape interface {
			Area() float64
		}

		type Point struct{ X, Y int }

		type Celsius float64

		type Alias = int

		var (
			a = 1
			b, c = 2, 3
		)

		const Limit = 10

		func Describe() string { return fmt.Sprint(strings.ToUpper("x")) }
		"""
	)
	assert parsed.package == "p"
	assert [(d.tag, d.name) for d in parsed.scope] == [
		("interface", "Shape"),
		("struct", "Point"),
		("other", "Celsius"),
		("other", "Alias"),
		("other", "a"),
		("other", "b"),
		("other", "c"),
		("other", "Limit"),
		("func", "Describe"),
	]
	categories = {d.name: d.category for d in parsed.scope if d.tag == "other"}
	assert categories == {
		"Celsius": "type-alias",
		"Alias": "type-alias",
		"a": "var",
		"b": "var",
		"c": "var",
		"Limit": "const",
	}
	assert [i.name for i in parsed.imports] == ["fmt", "strings"]


def test_offsets_point_at_declared_names():
	source, parsed = parse(
		"""
		package p

		func Foo() {}

		var Bar = 1
		"""
	)
	offsets = {d.name: d.offset for d in parsed.scope}
	assert offsets["Foo"] == source.index(b"Foo")
	assert offsets["Bar"] == source.index(b"Bar")


def test_scope_skips_methods_init_blank_and_locals():
	_, parsed = parse(
		"""
		package p

		import "strings"

		var _ = strings.ToUpper

		func init() {}

		type T struct{}

		func (t T) M() {}

		func helper() {
			var local int
			_ = local
		}
		"""
	)
	assert [d.name for d in parsed.scope] == ["T", "helper"]
	# Every declaration is still seen by the full-tree walk.
	names = [d.name for d in parsed.decls]
	assert "M" in names
	assert "local" in names
	assert "init" in names


def test_first_declaration_of_a_name_wins():
	_, parsed = parse(
		"""
		package p

		var A = 1

		func A() {}
		"""
	)
	assert [(d.tag, d.name) for d in parsed.scope] == [("other", "A")]


def test_receiver_types_are_dereferenced_once():
	_, parsed = parse(
		"""
		package p

		type S struct{}

		func (s *S) Ptr() {}

		func (s S) Val() {}

		func (S) Anon() {}

		func (s **S) Twice() {}
		"""
	)
	receivers = {d.name: d.receiver for d in parsed.decls if d.tag == "func"}
	assert receivers == {"Ptr": "S", "Val": "S", "Anon": "S", "Twice": None}


def test_interface_members_skip_embedded():
	source, parsed = parse(
		"""
		package p

		import "io"

		type ReadCloser interface {
			io.Reader
			Close() error
			Name() string
		}
		"""
	)
	(iface,) = [d for d in parsed.decls if d.tag == "interface"]
	assert [m.name for m in iface.members] == ["Close", "Name"]
	assert iface.members[0].offset == source.index(b"Close")


def test_syntax_error_raises_parse_error():
	with pytest.raises(ParseError) as excinfo:
		parse(
			"""
			package p

			func Broken( {
			"""
		)
	assert excinfo.value.path == "/ws/src/p/p.go"
	assert excinfo.value.diagnostic


def test_missing_package_clause_is_a_parse_error():
	with pytest.raises(ParseError, match="expected 'package'"):
		parse("func Foo() {}\n")


@pytest.mark.parametrize(
	"code",
	[
		"package p\n\nfunc Foo() {}\n\nx := 1\n",
		'package p\n\nfunc Foo() {}\n\nimport "fmt"\n',
		"package p\n\npackage q\n\nfunc Foo() {}\n",
		"package p\n\nfor {}\n",
	],
	ids=["statement", "late-import", "second-package", "loop"],
)
def test_invalid_file_layout_is_a_parse_error(code: str):
	with pytest.raises(ParseError) as excinfo:
		parse_go_source("/ws/src/p/p.go", code.encode("utf-8"))
	assert excinfo.value.diagnostic[0].isdigit()


def test_comments_may_precede_the_package_clause():
	_, parsed = parse(
		"""
		// Package p does things.
		package p

		// Foo is documented.
		func Foo() {}
		"""
	)
	assert [d.name for d in parsed.scope] == ["Foo"]
