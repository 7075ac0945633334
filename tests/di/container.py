"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from opaq.util.di import PROVIDERS, Component, get_provider


def build_test_container(
    unmock: set[Component] | None = None, for_app: bool = False
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables, so integration runs
    point at whatever DATABASE__URL is exported.

    Args:
        unmock: Components to use production implementations for.
                All others use mocks if available.
        for_app: Include the FastAPI integration provider, for containers
                 wired into an app under TestClient

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit tests - in-memory repositories
        container = build_test_container()

        # Integration tests - PostgreSQL repositories
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        if base.__subclasses__() and component_name:
            provider_class = get_provider(base, use_mock=component_name not in unmock)
        else:
            provider_class = get_provider(base, use_mock=False)
        provider_instances.append(provider_class())

    if for_app:
        provider_instances.append(FastapiProvider())

    return make_async_container(*provider_instances)


def _validate_unmock(unmock: set[Component]) -> None:
    """Reject component names no mockable provider declares."""
    known = {
        getattr(p, "__mock_component__")
        for p in PROVIDERS
        if p.__subclasses__() and getattr(p, "__mock_component__", None)
    }
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
