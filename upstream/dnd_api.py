# Copyright 2025 Google LLC
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
# ==============================================================================

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.dnd5eapi.co/api"
REQUEST_TIMEOUT = 30  # seconds

CLASS_RESOURCES = (
    "features",
    "multiclassing",
    "proficiencies",
    "spellcasting",
    "spells",
    "subclasses",
)


class InvalidArgument(ValueError):
    """Raised when a caller passes an empty identifier."""


class InvalidUpstreamResponse(ValueError):
    """Raised when the upstream payload does not have the expected shape."""


class UpstreamConnectionError(ConnectionError):
    """Raised when the upstream API answers with a failure status."""

    def __init__(self, status_code: Optional[int], reason: str):
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            super().__init__(reason)
        else:
            super().__init__(f"{status_code} {reason}".strip())


def _require_identifier(value: str, label: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgument(f"{label} cannot be empty")
    return str(value).strip()


def _path_segment(value: str) -> str:
    # "#", "?" and "/" must not change which upstream resource is addressed
    return requests.utils.quote(value, safe="")


class UpstreamClient:
    """
    Client for the public D&D 5e reference API.

    Args:
        base_url (str): Root of the API, e.g. "https://www.dnd5eapi.co/api".
        timeout (float): Per-request timeout in seconds.
        session (requests.Session): Optional session, mostly for tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"Accept": "application/json"})
        self.session = session

    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Upstream request to %s failed: %s", url, e)
            raise UpstreamConnectionError(None, str(e)) from e

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise InvalidUpstreamResponse(
                f"Upstream returned a non-JSON body for {response.url}"
            ) from e

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if not response.ok:
            raise UpstreamConnectionError(response.status_code, response.reason or "")

    def fetch_collection(self, path: str) -> Any:
        """
        Fetches a list endpoint. Every failure status, 404 included, raises.

        Raises:
            UpstreamConnectionError: On any non-2xx response or transport error.
        """
        response = self._get(path)
        self._raise_for_status(response)
        return self._decode(response)

    def fetch_detail(self, path: str) -> Optional[Any]:
        """
        Fetches a single resource.

        Returns:
            The decoded JSON body, or None when upstream answers 404.
        """
        response = self._get(path)
        if response.status_code == 404:
            logger.info("Upstream resource %s not found", path)
            return None
        self._raise_for_status(response)
        return self._decode(response)

    def get_classes(self) -> Any:
        return self.fetch_collection("/classes")

    def get_class(self, index: str) -> Optional[Any]:
        index = _require_identifier(index, "Class index")
        return self.fetch_detail(f"/classes/{_path_segment(index)}")

    def get_class_resource(self, index: str, resource: str) -> Optional[Any]:
        index = _require_identifier(index, "Class index")
        resource = _require_identifier(resource, "Class resource")
        if resource not in CLASS_RESOURCES:
            raise InvalidArgument(f"Unknown class resource '{resource}'")
        return self.fetch_detail(f"/classes/{_path_segment(index)}/{resource}")
