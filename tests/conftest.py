"""Pytest configuration and fixtures."""

import json

import httpx
import pytest


@pytest.fixture
def sample_package_json():
    """Sample package.json content for testing."""
    return """
{
  "name": "test-project",
  "version": "1.0.0",
  "scripts": {
    "test": "jest"
  },
  "dependencies": {
    "lodash": "^4.17.0",
    "react": "latest"
  },
  "devDependencies": {
    "jest": "29.7.0"
  }
}
"""


@pytest.fixture
def project_dir(tmp_path, sample_package_json):
    """Create a temporary project with a package.json."""
    (tmp_path / "package.json").write_text(sample_package_json)
    return tmp_path


@pytest.fixture
def registry():
    """Fake npm registry serving ``{name}/latest`` documents.

    Set ``registry.versions[name]`` to publish a version. Requested package
    names are appended to ``registry.calls``.
    """

    class FakeRegistry:
        def __init__(self):
            self.versions: dict[str, str] = {}
            self.calls: list[str] = []

        def handler(self, request: httpx.Request) -> httpx.Response:
            path = request.url.path
            assert path.endswith("/latest")
            name = path[1 : -len("/latest")]
            self.calls.append(name)
            if name not in self.versions:
                return httpx.Response(404, json={"error": "Not found"})
            return httpx.Response(200, content=json.dumps({"name": name, "version": self.versions[name]}))

        @property
        def transport(self) -> httpx.MockTransport:
            return httpx.MockTransport(self.handler)

    return FakeRegistry()
