"""Tool and project naming rules."""
import re
import secrets

from wbtl.core.errors import InvalidToolNameError, NotOrgRepositoryError

TOOL_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
SUFFIX_BYTES = 2


def validate_tool_name(name: str) -> str:
    """Validate a tool name and return it unchanged.

    Rules: lowercase letters, digits and dashes, starting with a letter,
    no consecutive dashes, no trailing dash.

    Raises:
        InvalidToolNameError: With the first rule the name breaks
    """
    if not name or not TOOL_NAME_PATTERN.match(name):
        raise InvalidToolNameError(
            name,
            "Must contain only lowercase letters, numbers, and dashes.\n"
            "Must start with a letter.\n"
            "Examples: timer, json-format, pdf-merge",
        )

    if "--" in name:
        raise InvalidToolNameError(name, "Cannot contain consecutive dashes.")

    if name.endswith("-"):
        raise InvalidToolNameError(name, "Cannot end with a dash.")

    return name


def is_valid_tool_name(name: str) -> bool:
    try:
        validate_tool_name(name)
    except InvalidToolNameError:
        return False
    return True


def random_suffix() -> str:
    """Return 4 random lowercase hex characters."""
    return secrets.token_hex(SUFFIX_BYTES)


def project_name(tool_name: str, prefix: str = "wbtl-app-") -> str:
    return f"{prefix}{tool_name}"


def suffixed_name(base_name: str, suffix: str) -> str:
    return f"{base_name}-{suffix}"


def tool_name_from_origin(origin_url: str, org: str = "wbtl-app") -> str:
    """Extract the tool name from a GitHub origin URL of the organization.

    Accepts HTTPS and SSH forms, with or without a trailing .git.

    Raises:
        NotOrgRepositoryError: If the URL does not point into the organization
        InvalidToolNameError: If no repository name can be extracted
    """
    org_pattern = re.compile(rf"github\.com[:/]{re.escape(org)}/")
    if not org_pattern.search(origin_url):
        raise NotOrgRepositoryError(
            f"This doesn't appear to be a {org} repository.\n"
            f"Origin: {origin_url}\n"
            f"Expected: github.com/{org}/<tool-name>"
        )

    match = re.search(rf"github\.com[:/]{re.escape(org)}/([^/]+?)(?:\.git)?/?$", origin_url)
    if not match:
        raise InvalidToolNameError(
            origin_url, "Could not extract tool name from origin URL."
        )
    return match.group(1)
