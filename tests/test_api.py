from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api import create_app
from goviz.config import GovizConfig


@pytest.fixture
def client(workspace: Path) -> TestClient:
	return TestClient(create_app(GovizConfig(workspace_root=workspace)))


def test_lists_workspace_root(client: TestClient):
	resp = client.get("/gopath")
	assert resp.status_code == 200
	assert resp.headers["content-type"].startswith("text/json")
	assert resp.text.startswith("[\n  {")
	nodes = resp.json()
	assert sorted(n["Label"] for n in nodes) == ["acme", "hello", "top.go"]
	assert list(nodes[0]) == ["Type", "Kind", "Name", "Loc", "Dir", "Id", "Label", "Value"]
	assert {n["Type"] for n in nodes} == {"topLevel"}


def test_source_file_symbols(client: TestClient):
	nodes = client.get("/gopath", params={"dir": "acme/acme.go"}).json()
	assert [(n["Type"], n["Kind"], n["Name"]) for n in nodes] == [("object", "const", "Version")]
	assert nodes[0]["Label"] == "const\nVersion"
	assert nodes[0]["Value"] is None


def test_receiver_methods(client: TestClient, workspace: Path):
	(workspace / "acme" / "svc.go").write_text("package acme\n\ntype Svc struct{}\n\nfunc (Svc) Run() {}\n")
	nodes = client.get("/gopath", params={"dir": "acme/svc.go", "name": "Svc"}).json()
	assert [n["Label"] for n in nodes] == ["method\nRun"]


def test_errors_are_500(client: TestClient):
	resp = client.get("/gopath", params={"dir": "missing"})
	assert resp.status_code == 500
	assert "missing" in resp.json()["detail"]


def test_escape_is_500(client: TestClient):
	resp = client.get("/gopath", params={"dir": "../.."})
	assert resp.status_code == 500
