"""Cloudflare REST API client for Pages projects and DNS records."""
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from wbtl.core.config import CLOUDFLARE_API_BASE_URL
from wbtl.core.errors import CloudflareApiError
from wbtl.core.logger import get_logger

logger = get_logger(__name__)

# Error code Cloudflare returns when a Pages project name is claimed globally
NAME_TAKEN_CODE = 8000014
NAME_TAKEN_MESSAGE = re.compile(r"already.*taken|name.*exists|duplicate", re.IGNORECASE)


def _parse_code(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class CloudflareResponse:
    """Parsed Cloudflare API envelope."""
    success: bool
    errors: List[Tuple[Optional[int], str]] = field(default_factory=list)
    result: Any = None
    result_info: Dict[str, Any] = field(default_factory=dict)
    status_code: Optional[int] = None
    raw: str = ""

    @classmethod
    def from_text(cls, text: str, status_code: Optional[int] = None) -> "CloudflareResponse":
        """Build a response from a raw body; non-JSON bodies count as failures."""
        try:
            payload = json.loads(text) if text else {}
        except ValueError:
            return cls(
                success=False,
                errors=[(None, text.strip() or "Empty response")],
                status_code=status_code,
                raw=text,
            )

        if not isinstance(payload, dict):
            return cls(success=False, errors=[(None, text)], status_code=status_code, raw=text)

        errors = []
        for error in payload.get("errors") or []:
            if isinstance(error, dict):
                errors.append((_parse_code(error.get("code")), str(error.get("message", ""))))
            else:
                errors.append((None, str(error)))

        return cls(
            success=payload.get("success") is True,
            errors=errors,
            result=payload.get("result"),
            result_info=payload.get("result_info") or {},
            status_code=status_code,
            raw=text,
        )

    @property
    def error_message(self) -> str:
        """All error messages joined for display."""
        messages = [message for _, message in self.errors if message]
        return "; ".join(messages) if messages else "Unknown error"

    def is_name_taken(self) -> bool:
        """Return True when the failure means the project name is claimed elsewhere.

        The message pattern is a heuristic over Cloudflare's wording; the
        error code is the reliable signal.
        """
        if self.success:
            return False
        for code, message in self.errors:
            if code == NAME_TAKEN_CODE:
                return True
            if NAME_TAKEN_MESSAGE.search(message):
                return True
        return False


@dataclass
class BuildSettings:
    """Build configuration for a Pages project."""
    destination_dir: str
    build_command: str = ""
    root_dir: str = ""

    def to_payload(self) -> Dict[str, str]:
        return {
            "build_command": self.build_command,
            "destination_dir": self.destination_dir,
            "root_dir": self.root_dir,
        }


class CloudflareClient:
    """Thin wrapper over the Cloudflare v4 API used for Pages provisioning."""

    def __init__(
        self,
        account_id: str,
        api_token: str,
        zone_id: Optional[str] = None,
        base_url: str = CLOUDFLARE_API_BASE_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.account_id = account_id
        self.zone_id = zone_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        })

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> CloudflareResponse:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CloudflareApiError(f"Request to Cloudflare failed: {method} {path}: {e}")

        parsed = CloudflareResponse.from_text(response.text, status_code=response.status_code)
        if not parsed.success:
            logger.debug(f"Cloudflare error ({response.status_code}): {parsed.error_message}")
        return parsed

    def _pages_path(self, suffix: str = "") -> str:
        return f"/accounts/{self.account_id}/pages/projects{suffix}"

    def _zone_path(self, suffix: str = "") -> str:
        if not self.zone_id:
            raise CloudflareApiError("No zone configured for DNS operations")
        return f"/zones/{self.zone_id}{suffix}"

    def get_project(self, name: str) -> CloudflareResponse:
        """Fetch a Pages project from the caller's account."""
        return self._request("GET", self._pages_path(f"/{name}"))

    def project_exists(self, name: str) -> bool:
        return self.get_project(name).success

    def create_project(
        self,
        name: str,
        owner: str,
        repo_name: str,
        build: BuildSettings,
        production_branch: str = "main",
    ) -> CloudflareResponse:
        """Create a Pages project connected to a GitHub repository."""
        payload = {
            "name": name,
            "production_branch": production_branch,
            "source": {
                "type": "github",
                "config": {
                    "owner": owner,
                    "repo_name": repo_name,
                    "production_branch": production_branch,
                    "pr_comments_enabled": True,
                    "deployments_enabled": True,
                    "production_deployments_enabled": True,
                    "preview_deployment_setting": "all",
                    "preview_branch_includes": ["*"],
                    "preview_branch_excludes": [],
                },
            },
            "build_config": build.to_payload(),
        }
        return self._request("POST", self._pages_path(), payload=payload)

    def list_dns_records(self, name: str, record_type: str = "CNAME") -> CloudflareResponse:
        return self._request(
            "GET",
            self._zone_path("/dns_records"),
            params={"name": name, "type": record_type},
        )

    def dns_record_count(self, name: str, record_type: str = "CNAME") -> int:
        """Number of existing records; 0 when the lookup itself fails."""
        response = self.list_dns_records(name, record_type)
        if not response.success:
            return 0
        count = response.result_info.get("count")
        if isinstance(count, int):
            return count
        return len(response.result or [])

    def create_dns_record(
        self,
        name: str,
        content: str,
        record_type: str = "CNAME",
        proxied: bool = True,
        ttl: int = 1,
    ) -> CloudflareResponse:
        payload = {
            "type": record_type,
            "name": name,
            "content": content,
            "proxied": proxied,
            "ttl": ttl,
        }
        return self._request("POST", self._zone_path("/dns_records"), payload=payload)

    def add_project_domain(self, project: str, domain: str) -> CloudflareResponse:
        """Attach a custom domain to a Pages project."""
        return self._request(
            "POST",
            self._pages_path(f"/{project}/domains"),
            payload={"name": domain},
        )
