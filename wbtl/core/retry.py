"""Retry loop for creating resources under a global name namespace."""
from typing import Callable, Protocol, Tuple

from wbtl.core.errors import CloudflareApiError, NameCollisionExhaustedError
from wbtl.core.logger import get_logger
from wbtl.core.naming import random_suffix, suffixed_name

logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


class CreateResponse(Protocol):
    """Outcome of one create request, as returned by the API client."""

    success: bool
    raw: str

    @property
    def error_message(self) -> str: ...

    def is_name_taken(self) -> bool: ...


def create_with_unique_name(
    create: Callable[[str], CreateResponse],
    base_name: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    suffix_factory: Callable[[], str] = random_suffix,
) -> Tuple[str, CreateResponse, int]:
    """Create a resource, retrying with a random suffix on global name collisions.

    The first attempt uses base_name; every later one uses
    ``<base_name>-<suffix>``. There is no delay between attempts.

    Args:
        create: Callable issuing the create request for a candidate name
        base_name: Preferred name
        max_attempts: Total attempts including the first
        suffix_factory: Produces the disambiguating suffix

    Returns:
        Tuple of (accepted name, successful response, attempts used)

    Raises:
        NameCollisionExhaustedError: If every attempt hit a name collision
        CloudflareApiError: On any other failure, without retrying

    Example:
        name, response, _ = create_with_unique_name(
            lambda n: client.create_project(n, owner, repo, build),
            "wbtl-app-timer",
        )
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    name = base_name

    for attempt in range(1, max_attempts + 1):
        logger.info(f"Creating Cloudflare Pages project '{name}'...")
        last_attempted = name
        response = create(name)

        if response.success:
            return name, response, attempt

        if not response.is_name_taken():
            raise CloudflareApiError(
                f"Failed to create Cloudflare Pages project.\nError: {response.error_message}",
                response_text=response.raw,
            )

        if attempt == 1:
            logger.warning(f"Project name '{name}' is taken globally by another user.")
            logger.warning("Trying with random suffix...")
        else:
            logger.warning(
                f"Name '{name}' also taken. Retrying... (attempt {attempt}/{max_attempts})"
            )
        name = suffixed_name(base_name, suffix_factory())

    raise NameCollisionExhaustedError(max_attempts, last_attempted)
