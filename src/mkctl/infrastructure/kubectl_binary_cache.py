"""Version-keyed kubectl binary cache backed by HTTP downloads."""

import hashlib
import logging
import os
import stat
import tempfile
from pathlib import Path

import httpx

from mkctl.config import KUBERNETES_RELEASE_URL, DownloadConfig
from mkctl.domain.errors import BinaryUnavailable
from mkctl.domain.platform_support import DEFAULT_KUBERNETES_VERSION, normalize_version
from mkctl.infrastructure.host_platform import (
    kubectl_binary_name,
    runtime_arch,
    runtime_os,
)

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def kubectl_download_url(
    version: str,
    os_name: str,
    arch: str,
    *,
    binary_mirror: str = "",
    release_url: str = KUBERNETES_RELEASE_URL,
) -> tuple[str, str | None]:
    """Return the binary URL and, when verifiable, its checksum URL.

    Mirrors are expected to follow the upstream layout but do not publish
    checksums, so no checksum URL is returned for them.
    """
    binary = kubectl_binary_name(os_name)
    if binary_mirror:
        base = binary_mirror.rstrip("/")
        return f"{base}/{version}/bin/{os_name}/{arch}/{binary}", None
    url = f"{release_url.rstrip('/')}/{version}/bin/{os_name}/{arch}/{binary}"
    return url, f"{url}.sha256"


class KubectlBinaryCache:
    """Resolve kubectl binaries by version, downloading on first use."""

    def __init__(
        self,
        cache_dir: Path,
        *,
        download: DownloadConfig | None = None,
        default_version: str = DEFAULT_KUBERNETES_VERSION,
        os_name: str | None = None,
        arch: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.cache_dir = cache_dir
        self.transport = transport
        self.download = download or DownloadConfig()
        self.default_version = default_version
        self.os_name = os_name or runtime_os()
        self.arch = arch or runtime_arch()

    def binary_path(self, version: str) -> Path:
        """Return the cache location for ``version`` without fetching."""
        return (
            self.cache_dir
            / self.os_name
            / self.arch
            / version
            / kubectl_binary_name(self.os_name)
        )

    def kubectl(self, version: str, binary_mirror: str = "") -> Path:
        """Return a cached kubectl for ``version``, downloading when absent."""
        version = normalize_version(version, default=self.default_version)
        target = self.binary_path(version)
        if target.is_file():
            logger.debug("kubectl %s found in cache: %s", version, target)
            return target

        url, checksum_url = kubectl_download_url(
            version,
            self.os_name,
            self.arch,
            binary_mirror=binary_mirror,
            release_url=self.download.release_url,
        )
        logger.info("Downloading kubectl %s from %s", version, url)
        try:
            with httpx.Client(
                timeout=self.download.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                expected = self._fetch_checksum(client, checksum_url)
                self._download(client, url, target, expected)
        except httpx.HTTPError as exc:
            raise BinaryUnavailable(f"download of {url} failed: {exc}") from exc
        except OSError as exc:
            raise BinaryUnavailable(f"cannot write {target}: {exc}") from exc
        return target

    def _fetch_checksum(self, client: httpx.Client, url: str | None) -> str | None:
        if url is None:
            return None
        response = client.get(url)
        response.raise_for_status()
        fields = response.text.split()
        if not fields:
            raise BinaryUnavailable(f"empty checksum file at {url}")
        return fields[0].lower()

    def _download(
        self,
        client: httpx.Client,
        url: str,
        target: Path,
        expected_sha256: str | None,
    ) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        digest = hashlib.sha256()
        fd, tmp_name = tempfile.mkstemp(prefix=".kubectl-", dir=target.parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle, client.stream("GET", url) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes(_CHUNK_SIZE):
                    digest.update(chunk)
                    handle.write(chunk)
            actual = digest.hexdigest()
            if expected_sha256 is not None and actual != expected_sha256:
                raise BinaryUnavailable(
                    f"checksum mismatch for {url}: expected {expected_sha256}, got {actual}"
                )
            mode = tmp_path.stat().st_mode
            tmp_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
            os.replace(tmp_path, target)
        finally:
            tmp_path.unlink(missing_ok=True)
