from __future__ import annotations

import argparse
import logging
import os
import sys

import uvicorn

from goviz.config import load_config
from goviz.errors import GovizError
from goviz.model import encode_nodes
from goviz.workspace import navigate


def cmd_nodes(args: argparse.Namespace) -> None:
	config = load_config()
	root = os.path.abspath(args.root) if args.root else str(config.workspace_root)
	try:
		nodes = navigate(root, args.dir, args.name)
		body = encode_nodes(nodes)
	except GovizError as e:
		print(f"goviz: {e}", file=sys.stderr)
		sys.exit(1)
	print(body.decode("utf-8"))


def cmd_serve(args: argparse.Namespace) -> None:
	if args.root:
		os.environ["GOVIZ_ROOT"] = os.path.abspath(args.root)
	config = load_config()
	uvicorn.run(
		"api:app",
		host=args.host or config.host,
		port=args.port or config.port,
		reload=args.reload,
		log_level=config.log_level.lower(),
	)


def main() -> None:
	parser = argparse.ArgumentParser(prog="goviz")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pn = sub.add_parser("nodes", help="Print the nodes of a directory or Go file as JSON")
	pn.add_argument("--dir", default=None, help="Target relative to the workspace root")
	pn.add_argument("--name", default=None, help="List methods bound to this type")
	pn.add_argument("--root", default=None, help="Workspace root (default: $GOPATH/src)")
	pn.set_defaults(func=cmd_nodes)

	ps = sub.add_parser("serve", help="Run the HTTP server")
	ps.add_argument("--host", default=None)
	ps.add_argument("--port", type=int, default=None)
	ps.add_argument("--reload", action="store_true")
	ps.add_argument("--root", default=None, help="Workspace root (default: $GOPATH/src)")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	try:
		level = load_config().log_level
	except GovizError as e:
		parser.error(str(e))
	logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
	args.func(args)


if __name__ == "__main__":
	main()
