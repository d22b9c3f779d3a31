from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from goviz.config import GovizConfig, load_config
from goviz.errors import GovizError
from goviz.model import encode_nodes
from goviz.workspace import navigate


logger = logging.getLogger("goviz.api")


def create_app(config: Optional[GovizConfig] = None) -> FastAPI:
	if config is None:
		config = load_config()
	api = FastAPI(title="Go Workspace Navigator")
	api.state.config = config

	@api.get("/gopath")
	def gopath(
		target: str = Query("", alias="dir", description="Path relative to the workspace root"),
		name: str = Query("", description="Type whose methods should be listed"),
	) -> Response:
		root = str(config.workspace_root)
		try:
			nodes = navigate(root, target or None, name or None)
			body = encode_nodes(nodes)
		except GovizError as e:
			logger.warning("Request for %r (name=%r) failed: %s", target, name, e)
			raise HTTPException(status_code=500, detail=str(e)) from e
		return Response(content=body, media_type="text/json")

	return api


app = create_app()
