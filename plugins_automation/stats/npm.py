"""npm registry search and downloads API client."""

from __future__ import annotations

import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
from urllib.parse import quote

import requests

from ..errors import NpmRegistryError
from ..logging import get_logger
from ..models import PackageDownloads, PackageInfo, VersionDownloads

REGISTRY_URL = "https://registry.npmjs.org"
DOWNLOADS_URL = "https://api.npmjs.org/downloads"
SEARCH_SIZE = 250
PERIODS = ("last-week", "last-month", "last-year")
RECENT_VERSIONS = 10
REQUEST_TIMEOUT = 30


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class NpmRegistryClient:
    """Collects package metadata and download counts for npm scopes.

    ``search_delay`` follows each scope search and ``download_delay`` each
    package's download lookup; ``sleep`` is injectable for tests.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        registry_url: str = REGISTRY_URL,
        downloads_url: str = DOWNLOADS_URL,
        search_delay: float = 0.2,
        download_delay: float = 0.1,
        timeout: float = REQUEST_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session or requests.Session()
        self.registry_url = registry_url.rstrip("/")
        self.downloads_url = downloads_url.rstrip("/")
        self.search_delay = search_delay
        self.download_delay = download_delay
        self.timeout = timeout
        self._sleep = sleep
        self.logger = get_logger("stats.npm")

    def fetch_packages(self, scopes: Iterable[str]) -> List[PackageInfo]:
        """Search each scope, keep names inside it, then dedupe and sort by name."""
        packages: Dict[str, PackageInfo] = {}
        for scope in scopes:
            self.logger.info('Searching for packages with "%s"...', scope)
            for obj in self.search(scope):
                meta = obj.get("package") or {}
                name = meta.get("name")
                if not isinstance(name, str) or not name.startswith(f"{scope}/"):
                    continue
                if name in packages:
                    continue
                packages[name] = self._package_info(meta, self.package_details(name))
            self._sleep(self.search_delay)
        return [packages[name] for name in sorted(packages)]

    def search(self, text: str) -> List[Dict[str, Any]]:
        payload = self._get_json(
            f"{self.registry_url}/-/v1/search",
            params={"text": text, "size": SEARCH_SIZE},
        )
        objects = payload.get("objects") if isinstance(payload, dict) else None
        return [item for item in objects or [] if isinstance(item, dict)]

    def package_details(self, name: str) -> Dict[str, Any]:
        payload = self._get_json(f"{self.registry_url}/{quote(name, safe='')}")
        return payload if isinstance(payload, dict) else {}

    def download_count(self, name: str, period: str) -> int:
        """Return the point download count; a 404 means no recorded downloads."""
        url = f"{self.downloads_url}/point/{period}/{quote(name, safe='')}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NpmRegistryError(f"GET {url} failed: {exc}") from exc
        if resp.status_code == 404:
            return 0
        if resp.status_code >= 400:
            raise NpmRegistryError(f"HTTP {resp.status_code} for {url}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise NpmRegistryError(f"Invalid JSON from {url}") from exc
        downloads = payload.get("downloads") if isinstance(payload, dict) else None
        return int(downloads) if isinstance(downloads, (int, float)) else 0

    def fetch_downloads(self, packages: Sequence[PackageInfo]) -> List[PackageDownloads]:
        results: List[PackageDownloads] = []
        with ThreadPoolExecutor(max_workers=len(PERIODS)) as pool:
            for pkg in packages:
                try:
                    weekly, monthly, yearly = pool.map(
                        lambda period: self.download_count(pkg.name, period), PERIODS
                    )
                except NpmRegistryError as exc:
                    self.logger.warning("Could not fetch download stats for %s: %s", pkg.name, exc)
                    results.append(PackageDownloads(package_name=pkg.name))
                else:
                    results.append(
                        PackageDownloads(
                            package_name=pkg.name,
                            weekly=weekly,
                            monthly=monthly,
                            yearly=yearly,
                        )
                    )
                self._sleep(self.download_delay)
        return results

    def fetch_version_downloads(self, packages: Sequence[PackageInfo]) -> List[VersionDownloads]:
        """Spread each package's monthly count evenly over its latest versions.

        The downloads API has no per-version breakdown, so these figures are
        estimates.
        """
        estimates: List[VersionDownloads] = []
        for pkg in packages:
            try:
                monthly = self.download_count(pkg.name, "last-month")
            except NpmRegistryError as exc:
                self.logger.warning("Could not fetch version download stats for %s: %s", pkg.name, exc)
                continue
            estimates.extend(estimate_version_downloads(pkg, monthly))
            self._sleep(self.download_delay)
        return estimates

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            raise NpmRegistryError(f"GET {url} failed: {exc}") from exc
        except ValueError as exc:
            raise NpmRegistryError(f"Invalid JSON from {url}") from exc

    @staticmethod
    def _package_info(meta: Dict[str, Any], details: Dict[str, Any]) -> PackageInfo:
        links = meta.get("links") or {}
        times = details.get("time") or {}
        maintainers = [
            str(item.get("username"))
            for item in meta.get("maintainers") or []
            if isinstance(item, dict) and item.get("username")
        ]
        return PackageInfo(
            name=meta["name"],
            versions=list((details.get("versions") or {}).keys()),
            description=meta.get("description"),
            repository=links.get("repository"),
            maintainers=maintainers,
            keywords=[str(word) for word in meta.get("keywords") or []],
            license=meta.get("license"),
            created_date=times.get("created"),
            modified_date=times.get("modified"),
        )


def estimate_version_downloads(pkg: PackageInfo, monthly: int) -> List[VersionDownloads]:
    versions = pkg.versions[-RECENT_VERSIONS:]
    if not versions:
        return []
    share = round_half_up(monthly / len(versions))
    return [
        VersionDownloads(package_name=pkg.name, version=version, downloads=share)
        for version in versions
    ]


__all__ = [
    "NpmRegistryClient",
    "PERIODS",
    "estimate_version_downloads",
    "round_half_up",
]
