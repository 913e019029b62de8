"""npm registry lookups and update checks."""

import asyncio
import logging

import httpx

from .decide import decide, is_selected
from .errors import RegistryFetchError
from .models import CheckOptions, DependencySpec, Manifest, UpdateDecision

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org"


class NodeResolver:
    """Resolver for npm package versions."""

    def __init__(
        self,
        registry_url: str = NPM_REGISTRY_URL,
        timeout: float | None = None,
        max_concurrency: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize npm resolver.

        Args:
            registry_url: Base URL of the npm registry
            timeout: Request timeout in seconds, None waits indefinitely
            max_concurrency: Maximum concurrent requests, None for no limit
            transport: Optional httpx transport, used by tests
        """
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self._transport = transport
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def get_latest_version(self, package_name: str) -> str:
        """Get the version the registry tags as latest.

        Args:
            package_name: Name of the package

        Returns:
            Latest version string
        """
        if self._semaphore is None:
            return await self._fetch_latest(package_name)
        async with self._semaphore:
            return await self._fetch_latest(package_name)

    async def check_entry(
        self, spec: DependencySpec, options: CheckOptions
    ) -> UpdateDecision | None:
        """Look up one dependency and decide whether to report it."""
        latest_version = await self.get_latest_version(spec.name)
        return decide(spec, latest_version, options)

    async def check_entries(
        self, entries: list[DependencySpec], options: CheckOptions
    ) -> list[UpdateDecision]:
        """Check multiple entries concurrently.

        The first failing lookup propagates. Decisions keep the order of
        ``entries``.
        """
        selected = [spec for spec in entries if is_selected(spec.specifier, options)]
        logger.debug("Checking %d of %d dependencies", len(selected), len(entries))

        tasks = [self.check_entry(spec, options) for spec in selected]
        results = await asyncio.gather(*tasks)
        return [decision for decision in results if decision is not None]

    async def check(self, manifest: Manifest, options: CheckOptions) -> list[UpdateDecision]:
        """Check every dependency of a manifest."""
        return await self.check_entries(manifest.entries(), options)

    async def _fetch_latest(self, package_name: str) -> str:
        """Fetch the latest manifest of a package from the registry.

        Args:
            package_name: Name of the package

        Returns:
            The "version" field of the registry document
        """
        url = f"{self.registry_url}/{package_name}/latest"
        logger.debug("GET %s", url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()

        except httpx.TimeoutException as e:
            raise RegistryFetchError(package_name, f"Timeout fetching {package_name}") from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise RegistryFetchError(package_name, f"Package {package_name} not found") from e
            raise RegistryFetchError(package_name, f"HTTP error fetching {package_name}: {e}") from e
        except httpx.HTTPError as e:
            raise RegistryFetchError(package_name, f"Network error fetching {package_name}: {e}") from e
        except ValueError as e:
            raise RegistryFetchError(package_name, f"Malformed response for {package_name}: {e}") from e

        version = data.get("version") if isinstance(data, dict) else None
        if not isinstance(version, str) or not version:
            raise RegistryFetchError(package_name, f"No version in registry response for {package_name}")

        logger.debug("%s latest is %s", package_name, version)
        return version
