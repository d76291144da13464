# Copyright (c) 2025 VoidUI Project
# 
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# 
#     http://www.apache.org/licenses/LICENSE-2.0
# 
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""HTTP client for the component registry."""

import logging
import time
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from voidui.config import config
from voidui.crypto.canonicalize import read_component_text
from voidui.errors import RegistryError
from voidui.models import RegistryItem

logger = logging.getLogger(__name__)

LOCAL_HOSTS = ("localhost", "127.0.0.1")

# Where historical versions live relative to a local checkout
LOCAL_VERSION_DIRS = [
    Path("registry") / "components" / "ui",
    Path("apps") / "www-docs" / "registry" / "components" / "ui",
]


def extract_component_code(item: RegistryItem) -> str:
    """
    Return the source of the main component file of a registry item.

    Prefers the ``registry:ui`` file (or one under ``/components/ui/``),
    then the first file, then an empty string.
    """
    for registry_file in item.files:
        if registry_file.type == "registry:ui" or "/components/ui/" in registry_file.path:
            return registry_file.content

    if item.files:
        return item.files[0].content
    return ""


class RegistryClient:
    """Fetches component metadata and sources from a registry."""

    def __init__(
        self,
        registry_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        local_roots: Optional[List[Path]] = None
    ):
        """
        Initialize the registry client.

        Args:
            registry_url: Base registry URL. Defaults to the configured one
            timeout: Request timeout in seconds
            max_retries: Retries after a transport failure (at most one)
            retry_delay: Seconds to wait before retrying
            transport: Optional httpx transport, used by tests
            local_roots: Checkouts searched for historical versions when the
                registry is served from localhost. Defaults to cwd
        """
        self.registry_url = (registry_url or config.registry_url).rstrip("/")
        self.max_retries = min(config.max_retries if max_retries is None else max_retries, 1)
        self.retry_delay = config.retry_delay_seconds if retry_delay is None else retry_delay
        self.local_roots = local_roots if local_roots is not None else [Path.cwd()]
        self._client = httpx.Client(
            timeout=timeout or config.request_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": config.user_agent},
            transport=transport
        )

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def item_url(self, name: str) -> str:
        return f"{self.registry_url}/{name}.json"

    @property
    def is_local(self) -> bool:
        return urlparse(self.registry_url).hostname in LOCAL_HOSTS

    def _get(self, url: str) -> httpx.Response:
        """GET with a single retry on transport failures."""
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                return self._client.get(url)
            except httpx.TransportError as e:
                last_error = e
                if attempt < self.max_retries:
                    logger.warning(f"Fetching {url} failed ({e}); retrying in {self.retry_delay}s")
                    time.sleep(self.retry_delay)

        raise RegistryError(
            f"Failed to fetch registry data. Check your internet connection.\n   Tried: {url}"
        ) from last_error

    def fetch_item(self, name: str) -> Optional[RegistryItem]:
        """
        Fetch a component's registry item.

        Returns:
            The registry item, or None if the registry has no such component

        Raises:
            RegistryError: On network failure, HTTP errors or bad payloads
        """
        url = self.item_url(name)
        logger.debug(f"Fetching {url}")
        response = self._get(url)

        if response.status_code == 404:
            return None
        if response.is_error:
            raise RegistryError(f"HTTP {response.status_code}: {response.reason_phrase} ({url})")

        try:
            data = response.json()
        except ValueError as e:
            raise RegistryError(f"Registry returned invalid JSON at {url}") from e

        try:
            return RegistryItem.model_validate(data)
        except ValidationError as e:
            raise RegistryError(f"Invalid registry item at {url}: {e.error_count()} validation errors") from e

    def fetch_component_version(
        self,
        name: str,
        version: str,
        item: Optional[RegistryItem] = None
    ) -> Optional[str]:
        """
        Fetch the source of a specific component version.

        The current version comes from the registry item itself. Historical
        versions are only available from a local checkout when the registry
        runs on localhost.

        Args:
            name: Component name
            version: Version to fetch
            item: Already fetched registry item, to avoid a second request

        Returns:
            Source code, or None if the version is not available
        """
        item = item or self.fetch_item(name)
        if item is None:
            return None

        versioning = item.versioning
        if versioning and versioning.current_version == version:
            return extract_component_code(item)

        if self.is_local:
            return self._read_local_version(name, version)

        logger.debug(f"Historical version {name}@{version} is not served by {self.registry_url}")
        return None

    def _read_local_version(self, name: str, version: str) -> Optional[str]:
        file_name = f"{version}{config.component_extension}"
        for root in self.local_roots:
            for directory in LOCAL_VERSION_DIRS:
                path = Path(root) / directory / f"{name}{config.versions_dir_suffix}" / file_name
                if path.exists():
                    logger.debug(f"Using local version file {path}")
                    return read_component_text(path)
        return None
