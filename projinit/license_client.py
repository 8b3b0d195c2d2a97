"""
license_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

It is used to fetch the text of the chosen license so the new project gets a
LICENSE file. Writing that file is best-effort.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from projinit import log
from projinit.config import ProjectConfig
from projinit.vcs import Outcome, StepOutcome


class GitHubError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class LicenseInfo:
    key: str
    name: str
    spdx_id: str
    body: str


class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = "https://api.github.com", timeout: float = 10.0) -> None:
        self._token = (token or "").strip()
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "projinit",
        }
        # Anonymous calls work; a token only raises the rate limit.
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, path: str) -> Any:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {message}", status_code=r.status_code)
        return r.json()

    def get_license(self, key: str) -> LicenseInfo | None:
        """
        Return the license identified by `key` (e.g. "mit"), or None if GitHub does not know it.
        """
        try:
            data = self._request("GET", f"/licenses/{key.strip().lower()}")
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise
        return LicenseInfo(
            key=data["key"],
            name=data.get("name") or data["key"],
            spdx_id=data.get("spdx_id") or "",
            body=data["body"],
        )


def fill_license(body: str, *, year: str, fullname: str) -> str:
    return body.replace("[year]", year).replace("[yyyy]", year).replace("[fullname]", fullname).replace(
        "[name of copyright owner]", fullname
    )


def write_license(root: str | Path, config: ProjectConfig, client: GitHubClient, *, year: str) -> StepOutcome:
    """
    Write LICENSE for `config.license`. Never raises for network or lookup problems.
    """
    try:
        info = client.get_license(config.license)
    except GitHubError as e:
        return StepOutcome("license", Outcome.FAILED, str(e))
    if info is None:
        return StepOutcome("license", Outcome.FAILED, f"unknown license {config.license!r}")

    path = Path(root) / "LICENSE"
    try:
        path.write_text(fill_license(info.body, year=year, fullname=config.author_name), encoding="utf-8")
    except OSError as e:
        return StepOutcome("license", Outcome.FAILED, f"could not write {path.name}: {e}")
    log.info(f"📄 Wrote LICENSE ({info.name})")
    return StepOutcome("license", Outcome.SUCCESS, info.spdx_id)
