"""Shared test fixtures for wbtl tests."""
import json

import pytest

from wbtl.core.config import WbtlConfig, reset_config
from wbtl.services.cloudflare import CloudflareResponse

ENV_KEYS = [
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_ZONE_ID",
    "WBTL_ENV_FILE",
    "WBTL_GITHUB_ORG",
    "WBTL_DOMAIN",
    "WBTL_PROJECT_PREFIX",
    "WBTL_PROJECTS_DIR",
    "WBTL_SITE_DIR",
    "WBTL_API_BASE_URL",
    "WBTL_REQUEST_TIMEOUT",
    "WBTL_MAX_NAME_ATTEMPTS",
    "WBTL_MOCK",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test in an empty directory with no wbtl settings set.

    setenv before delenv makes monkeypatch remove values that dotenv
    loads during a test.
    """
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def site_dir(tmp_path):
    """Marketing site checkout with the page template."""
    site = tmp_path / "site"
    (site / "template").mkdir(parents=True)
    (site / "template" / "tool.html").write_text("<html>tool</html>")
    (site / "experiment" / "tool-specs").mkdir(parents=True)
    return site


@pytest.fixture
def config(tmp_path, site_dir):
    return WbtlConfig(
        cloudflare_account_id="acc123",
        cloudflare_api_token="token123",
        cloudflare_zone_id="zone123",
        projects_dir=tmp_path / "projects",
        site_dir=site_dir,
    )


def make_cf_response(success=True, errors=None, result=None, result_info=None) -> CloudflareResponse:
    """Build a parsed Cloudflare envelope the way the API returns it."""
    body = {
        "success": success,
        "errors": errors or [],
        "messages": [],
        "result": result,
    }
    if result_info is not None:
        body["result_info"] = result_info
    return CloudflareResponse.from_text(json.dumps(body), status_code=200 if success else 400)


def make_name_taken() -> CloudflareResponse:
    return make_cf_response(
        success=False,
        errors=[{"code": 8000014, "message": "A project with this name already exists."}],
    )


@pytest.fixture
def cf_response():
    """Factory for Cloudflare envelopes."""
    return make_cf_response


@pytest.fixture
def name_taken():
    """Factory for the global name collision error."""
    return make_name_taken
