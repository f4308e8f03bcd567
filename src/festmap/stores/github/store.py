"""GitHub contents API document store."""

from __future__ import annotations

import base64
import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from festmap.contracts.exceptions import PersistError, UpstreamFetchError
from festmap.contracts.store import DocumentStore, StoredDocument, WriteReceipt

_LOG = logging.getLogger(__name__)

_API_VERSION = "2022-11-28"
_STALE_STATUS_CODES = frozenset({409, 412})


class GitHubContentsStore(DocumentStore):
    """Reads and commits one file of a GitHub repository.

    The blob sha returned on read is the version token; GitHub rejects a write
    whose sha no longer matches the branch head with 409 Conflict.
    """

    def __init__(
        self,
        *,
        owner: str,
        repo: str,
        file_path: str,
        token: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        user_agent: str = "festmap-sync",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._owner = owner
        self._repo = repo
        self._file_path = file_path.strip("/")
        self._token = token
        self._branch = branch
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GitHubContentsStore:
        self._client = httpx.AsyncClient(
            base_url=self._api_url,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": _API_VERSION,
                "User-Agent": self._user_agent,
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def contents_path(self) -> str:
        return f"/repos/{self._owner}/{self._repo}/contents/{quote(self._file_path)}"

    async def read(self) -> StoredDocument:
        client = self._require_client()
        try:
            response = await client.get(self.contents_path, params={"ref": self._branch})
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(f"failed to reach GitHub: {exc}") from exc

        if response.status_code != 200:
            raise UpstreamFetchError(
                f"GitHub returned {response.status_code} for {self._file_path}@{self._branch}"
            )
        payload = self._json_object(response, error_cls=UpstreamFetchError)
        sha = payload.get("sha")
        if not isinstance(sha, str):
            raise UpstreamFetchError(f"{self._file_path} is not a file")

        content = await self._decode_content(payload)
        _LOG.debug("Read %s@%s (%d bytes, sha %s)", self._file_path, self._branch, len(content), sha)
        return StoredDocument(content=content, version_token=sha)

    async def write(self, content: bytes, *, expected_version: str | None, message: str) -> WriteReceipt:
        client = self._require_client()
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self._branch,
        }
        if expected_version is not None:
            body["sha"] = expected_version

        try:
            response = await client.put(self.contents_path, json=body)
        except httpx.HTTPError as exc:
            raise PersistError(f"failed to reach GitHub: {exc}") from exc

        if response.status_code not in (200, 201):
            raise PersistError(
                f"GitHub rejected the update of {self._file_path} ({response.status_code}): {self._error_message(response)}",
                status_code=response.status_code,
                stale=response.status_code in _STALE_STATUS_CODES,
            )

        payload = self._json_object(response, error_cls=PersistError)
        file_info = payload.get("content") or {}
        commit_info = payload.get("commit") or {}
        receipt = WriteReceipt(
            version_token=file_info.get("sha"),
            commit_sha=commit_info.get("sha"),
            commit_url=commit_info.get("html_url"),
        )
        _LOG.info("Committed %s@%s: %s", self._file_path, self._branch, receipt.commit_sha)
        return receipt

    async def _decode_content(self, payload: dict[str, Any]) -> bytes:
        raw = payload.get("content")
        if payload.get("encoding") == "base64" and raw:
            return base64.b64decode(raw)

        # Files above 1 MB come back without inline content.
        download_url = payload.get("download_url")
        if not download_url:
            return b""
        try:
            response = await self._require_client().get(download_url)
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(f"failed to download {self._file_path}: {exc}") from exc
        if response.status_code != 200:
            raise UpstreamFetchError(f"GitHub returned {response.status_code} downloading {self._file_path}")
        return response.content

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("GitHubContentsStore must be used as an async context manager")
        return self._client

    @staticmethod
    def _json_object(
        response: httpx.Response,
        *,
        error_cls: type[UpstreamFetchError] | type[PersistError],
    ) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise error_cls(f"GitHub returned a non-JSON response ({response.status_code})") from exc
        if not isinstance(payload, dict):
            raise error_cls("GitHub returned an unexpected response shape")
        return payload

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text.strip() or "no details"
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return "no details"
