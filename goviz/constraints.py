"""Go build constraints.

Evaluates ``//go:build`` expressions, legacy ``// +build`` lines and the
``_GOOS``/``_GOARCH`` file name suffixes against a build context, the way
go/build selects the files of a package.
"""

from __future__ import annotations

import platform
import re
import sys
from typing import Callable, List, Optional

from pydantic import BaseModel

from .errors import BuildError


KNOWN_OS = frozenset(
	"aix android darwin dragonfly freebsd hurd illumos ios js linux nacl netbsd "
	"openbsd plan9 solaris wasip1 windows zos".split()
)

KNOWN_ARCH = frozenset(
	"386 amd64 amd64p32 arm armbe arm64 arm64be loong64 mips mipsle mips64 "
	"mips64le mips64p32 mips64p32le ppc ppc64 ppc64le riscv riscv64 s390 s390x "
	"sparc sparc64 wasm".split()
)

UNIX_OS = frozenset(
	"aix android darwin dragonfly freebsd hurd illumos ios linux netbsd openbsd solaris".split()
)

_MACHINE_ARCH = {
	"x86_64": "amd64",
	"amd64": "amd64",
	"i386": "386",
	"i686": "386",
	"x86": "386",
	"aarch64": "arm64",
	"arm64": "arm64",
	"armv7l": "arm",
	"armv6l": "arm",
	"ppc64le": "ppc64le",
	"s390x": "s390x",
	"riscv64": "riscv64",
}

_GO_VERSION = re.compile(r"^go1\.\d+$")
_TOKEN = re.compile(r"\s*(\(|\)|!|&&|\|\||[A-Za-z0-9_.]+)")
_TAG = re.compile(r"^[A-Za-z0-9_.]+$")


class BuildContext(BaseModel):
	goos: str
	goarch: str
	compiler: str = "gc"
	cgo: bool = False

	def match_tag(self, tag: str) -> bool:
		if tag in (self.goos, self.goarch, self.compiler):
			return True
		if tag == "cgo":
			return self.cgo
		if tag == "unix":
			return self.goos in UNIX_OS
		if tag == "linux" and self.goos == "android":
			return True
		if tag == "solaris" and self.goos == "illumos":
			return True
		if tag == "darwin" and self.goos == "ios":
			return True
		return bool(_GO_VERSION.match(tag))


def host_context() -> BuildContext:
	if sys.platform.startswith("win"):
		goos = "windows"
	elif sys.platform.startswith("freebsd"):
		goos = "freebsd"
	elif sys.platform.startswith("openbsd"):
		goos = "openbsd"
	elif sys.platform.startswith("netbsd"):
		goos = "netbsd"
	elif sys.platform.startswith("aix"):
		goos = "aix"
	elif sys.platform.startswith("sunos"):
		goos = "solaris"
	else:
		goos = sys.platform if sys.platform in KNOWN_OS else "linux"
	goarch = _MACHINE_ARCH.get(platform.machine().lower(), "amd64")
	return BuildContext(goos=goos, goarch=goarch)


def match_file_name(filename: str, context: BuildContext) -> bool:
	"""Apply the name_GOOS_GOARCH.go convention."""
	stem = filename[:-3] if filename.endswith(".go") else filename
	if stem.endswith("_test"):
		stem = stem[: -len("_test")]
	index = stem.find("_")
	if index < 0:
		return True
	parts = stem[index:].split("_")
	n = len(parts)
	if n >= 2 and parts[n - 2] in KNOWN_OS and parts[n - 1] in KNOWN_ARCH:
		return context.match_tag(parts[n - 2]) and context.match_tag(parts[n - 1])
	if parts[n - 1] in KNOWN_OS or parts[n - 1] in KNOWN_ARCH:
		return context.match_tag(parts[n - 1])
	return True


class _Expression:
	"""Recursive-descent evaluator for //go:build expressions."""

	def __init__(self, text: str, match: Callable[[str], bool]) -> None:
		self.tokens = self._tokenize(text)
		self.pos = 0
		self.match = match

	@staticmethod
	def _tokenize(text: str) -> List[str]:
		tokens: List[str] = []
		pos = 0
		text = text.rstrip()
		while pos < len(text):
			m = _TOKEN.match(text, pos)
			if m is None:
				raise BuildError(f"invalid build constraint: {text!r}")
			tokens.append(m.group(1))
			pos = m.end()
		return tokens

	def _peek(self) -> Optional[str]:
		return self.tokens[self.pos] if self.pos < len(self.tokens) else None

	def _next(self) -> str:
		token = self._peek()
		if token is None:
			raise BuildError("invalid build constraint: unexpected end of expression")
		self.pos += 1
		return token

	def evaluate(self) -> bool:
		result = self._or()
		if self._peek() is not None:
			raise BuildError(f"invalid build constraint: unexpected {self._peek()!r}")
		return result

	def _or(self) -> bool:
		result = self._and()
		while self._peek() == "||":
			self._next()
			right = self._and()
			result = result or right
		return result

	def _and(self) -> bool:
		result = self._not()
		while self._peek() == "&&":
			self._next()
			right = self._not()
			result = result and right
		return result

	def _not(self) -> bool:
		token = self._next()
		if token == "!":
			return not self._not()
		if token == "(":
			result = self._or()
			if self._next() != ")":
				raise BuildError("invalid build constraint: missing ')'")
			return result
		if not _TAG.match(token):
			raise BuildError(f"invalid build constraint: unexpected {token!r}")
		return self.match(token)


def evaluate_go_build(expression: str, context: BuildContext) -> bool:
	return _Expression(expression, context.match_tag).evaluate()


def evaluate_plus_build(line: str, context: BuildContext) -> bool:
	# Space-separated options are ORed, comma-separated terms ANDed.
	for option in line.split():
		terms = option.split(",")
		if all(_plus_build_term(term, context) for term in terms):
			return True
	return False


def _plus_build_term(term: str, context: BuildContext) -> bool:
	negated = term.startswith("!")
	tag = term[1:] if negated else term
	if not tag or not _TAG.match(tag):
		return False
	return context.match_tag(tag) != negated


def header_constraints(source: bytes) -> List[str]:
	"""Return the constraint comments preceding the package clause."""
	lines: List[str] = []
	for raw in source.splitlines():
		line = raw.decode("utf-8", errors="replace").strip()
		if line.startswith("package"):
			break
		if line.startswith("//go:build") or re.match(r"^//\s*\+build\b", line):
			lines.append(line)
	return lines


def should_build(source: bytes, context: BuildContext) -> bool:
	"""Report whether the file's header constraints admit ``context``.

	A //go:build line takes precedence over // +build lines.
	"""
	lines = header_constraints(source)
	for line in lines:
		if line.startswith("//go:build"):
			return evaluate_go_build(line[len("//go:build"):], context)
	plus = [re.sub(r"^//\s*\+build", "", line) for line in lines]
	return all(evaluate_plus_build(line, context) for line in plus)
