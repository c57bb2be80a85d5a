"""
Image storage as commits to a GitHub repository
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional

import httpx

from app.core.errors import InvalidArgument, StoreUnavailable

logger = logging.getLogger(__name__)

COMMITTER = {"name": "Event System", "email": "event-system@example.com"}


def strip_data_url(content: str) -> str:
    """Drop a `data:image/...;base64,` prefix, keeping only the base64 payload."""
    if content.startswith("data:") and "," in content:
        return content.split(",", 1)[1]
    return content


def check_image(content: str, max_size: int) -> int:
    """Decoded size of a base64 image, rejecting malformed or oversized payloads"""
    try:
        size = len(base64.b64decode(strip_data_url(content), validate=True))
    except (binascii.Error, ValueError) as exc:
        raise InvalidArgument("Image must be base64 encoded") from exc
    if size > max_size:
        raise InvalidArgument(f"Image exceeds the {max_size // (1024 * 1024)}MB upload limit")
    return size


class GitHubImageHost:
    """Uploads and deletes files through the GitHub contents API"""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.api_url = api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        }
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_url,
            headers=self._headers,
            timeout=10.0,
            transport=self._transport,
        )

    def _contents_path(self, path: str) -> str:
        return f"/repos/{self.owner}/{self.repo}/contents/{path}"

    def public_url(self, path: str) -> str:
        return f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/{self.branch}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        """Repository path of a URL produced by `public_url`, or None for foreign URLs."""
        prefix = self.public_url("")
        if url and url.startswith(prefix):
            return url[len(prefix):]
        return None

    def delete_url(self, url: str) -> bool:
        """Delete the file behind a URL from `public_url`; foreign URLs are left alone."""
        path = self.path_from_url(url)
        if not path:
            return False
        return self.delete_file(path)

    def upload_image(self, file_name: str, content: str, folder: str = "images") -> str:
        """Commit base64 `content` under `folder/file_name` and return its public URL"""
        path = f"{folder}/{file_name}"
        payload = {
            "message": f"Upload {file_name}",
            "content": strip_data_url(content),
            "committer": COMMITTER,
            "branch": self.branch,
        }
        try:
            with self._client() as client:
                response = client.put(self._contents_path(path), json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(f"Error uploading image {path} to GitHub: {exc}")
            raise StoreUnavailable("Image upload failed") from exc

        logger.info(f"Uploaded image {path}")
        return self.public_url(path)

    def delete_file(self, path: str) -> bool:
        """Delete a file by path. Returns False when it was already gone."""
        try:
            with self._client() as client:
                response = client.get(self._contents_path(path), params={"ref": self.branch})
                if response.status_code == 404:
                    logger.warning(f"Image {path} not found on GitHub, nothing to delete")
                    return False
                response.raise_for_status()
                sha = response.json()["sha"]

                response = client.request(
                    "DELETE",
                    self._contents_path(path),
                    json={
                        "message": f"Delete {path.rsplit('/', 1)[-1]}",
                        "sha": sha,
                        "committer": COMMITTER,
                        "branch": self.branch,
                    },
                )
                response.raise_for_status()
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.error(f"Error deleting image {path} from GitHub: {exc}")
            raise StoreUnavailable("Image delete failed") from exc

        logger.info(f"Deleted image {path}")
        return True
