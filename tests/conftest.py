"""Shared fakes: an aiohttp-like session and a git/forge toolchain stand-in."""

import json
import subprocess
from pathlib import Path

import pytest

from config_loader import GitHubConfig


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def text(self, encoding="utf-8", errors="strict"):
        if isinstance(self._body, bytes):
            return self._body.decode(encoding, errors)
        return self._body if isinstance(self._body, str) else json.dumps(self._body)

    async def json(self, content_type=None):
        return json.loads(self._body) if isinstance(self._body, str) else self._body


class FakeSession:
    """Routes GET requests by exact URL. A route is (status, body) or a callable(params) returning one."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, headers=None, params=None):
        self.calls.append({"url": url, "headers": headers, "params": params})
        route = self.routes.get(url, (404, "Not Found"))
        if callable(route):
            route = route(params)
        status, body = route
        return FakeResponse(status, body)

    @property
    def urls(self):
        return [c["url"] for c in self.calls]


class FakeToolchain:
    """Records every invocation; `clone` materializes `repo_files` under the destination."""

    def __init__(self, repo_files=None, bytecodes=None, clone_rc=0, build_rc=0):
        self.repo_files = repo_files or {}
        self.bytecodes = bytecodes or {}
        self.clone_rc = clone_rc
        self.build_rc = build_rc
        self.calls = []

    def _done(self, args, rc=0, stdout=""):
        return subprocess.CompletedProcess(args, rc, stdout=stdout, stderr="")

    def clone(self, url, dest):
        self.calls.append(("clone", url, Path(dest)))
        if self.clone_rc == 0:
            for rel, content in self.repo_files.items():
                p = Path(dest) / rel
                p.parent.mkdir(parents=True, exist_ok=True)
                p.write_text(content, encoding="utf-8")
        return self._done(["git", "clone", url, str(dest)], rc=self.clone_rc)

    def install(self, cwd):
        self.calls.append(("install", Path(cwd)))
        return self._done(["forge", "install"])

    def build(self, cwd):
        self.calls.append(("build", Path(cwd)))
        return self._done(["forge", "build"], rc=self.build_rc)

    def inspect_bytecode(self, contract_name, cwd):
        self.calls.append(("inspect", contract_name, Path(cwd)))
        return self._done(["forge", "inspect", contract_name, "bytecode"], stdout=self.bytecodes.get(contract_name, ""))

    def steps(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def gh_config():
    return GitHubConfig(token="test-token")


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_toolchain():
    return FakeToolchain
