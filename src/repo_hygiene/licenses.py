"""License text retrieval from the GitHub licenses API."""

from __future__ import annotations

import re
from dataclasses import dataclass

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .errors import LicenseFetchError
from .logging_config import get_logger

logger = get_logger(__name__)

LICENSES_API_URL = "https://api.github.com/licenses"
USER_AGENT = "repo-hygiene"

_SPDX_ID = re.compile(r"^[A-Za-z0-9.+-]+$")
_YEAR_PLACEHOLDERS = ("[year]", "[yyyy]", "<year>")
_HOLDER_PLACEHOLDERS = ("[fullname]", "[name of copyright owner]", "<name of author>")


@dataclass(slots=True, frozen=True)
class LicenseText:
    """A license template as returned by the API."""

    spdx_id: str
    name: str
    body: str

    def render(self, holder: str, year: int | str) -> str:
        text = self.body
        for placeholder in _YEAR_PLACEHOLDERS:
            text = text.replace(placeholder, str(year))
        for placeholder in _HOLDER_PLACEHOLDERS:
            text = text.replace(placeholder, holder)
        return text if text.endswith("\n") else text + "\n"


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "application/vnd.github+json"},
        timeout=10,
    )


def fetch_license(spdx_id: str) -> LicenseText:
    """Fetch the template for ``spdx_id`` (e.g. ``MIT``, ``Apache-2.0``)."""
    if not _SPDX_ID.match(spdx_id):
        raise LicenseFetchError(f"Invalid SPDX license identifier: {spdx_id!r}")

    url = f"{LICENSES_API_URL}/{spdx_id.lower()}"
    logger.debug("Fetching license %s from %s", spdx_id, url)
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise LicenseFetchError(f"Failed to fetch license {spdx_id}: {exc}") from exc

    if response.status_code == 404:
        raise LicenseFetchError(f"Unknown license: {spdx_id}")
    if response.status_code != 200:
        raise LicenseFetchError(
            f"Unexpected status code {response.status_code} fetching license {spdx_id}"
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise LicenseFetchError(f"License API returned invalid JSON for {spdx_id}") from exc

    body = payload.get("body") if isinstance(payload, dict) else None
    if not isinstance(body, str) or not body.strip():
        raise LicenseFetchError(f"License API response for {spdx_id} has no body")

    return LicenseText(
        spdx_id=str(payload.get("spdx_id") or spdx_id),
        name=str(payload.get("name") or spdx_id),
        body=body,
    )
