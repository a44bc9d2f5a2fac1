"""HTTP client for the entries API.

Thin transport wrapper used by the dashboard and tracker: no business logic,
every non-success response becomes an EntriesApiError.
"""

import copy
from datetime import date

import httpx

from carnet.core.time_utils import to_iso


class EntriesApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class EntriesClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        # An injected client (e.g. FastAPI's TestClient) keeps its own base URL
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self.token = token

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, action: str, **kwargs):
        try:
            r = self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise EntriesApiError(f"Failed to {action}: {e}") from e
        if not r.is_success:
            raise EntriesApiError(f"Failed to {action}: {r.text}", status_code=r.status_code)
        return r.json()

    def fetch_entries(self, start: date, end: date) -> list[dict]:
        params = {"startDate": to_iso(start), "endDate": to_iso(end)}
        return self._request("GET", "/entries", "fetch entries", params=params)

    def create_entry(self, start: date, end: date) -> dict:
        body = {"startDate": to_iso(start), "endDate": to_iso(end)}
        return self._request("POST", "/entries", "create entry", json=body)

    def get_entry(self, entry_id: str) -> dict:
        return self._request("GET", f"/entries/{entry_id}", "fetch entry")

    def update_entry(self, entry_id: str, entry: dict) -> dict:
        """Send the whole entry; date objects in the draft become ISO strings."""
        body = copy.deepcopy(entry)
        for key in ("startDate", "endDate"):
            if key in body:
                body[key] = to_iso(body[key])
        if "days" in body:
            body["days"] = [{**day, "date": to_iso(day["date"])} for day in body["days"]]
        return self._request("PUT", f"/entries/{entry_id}", "update entry", json=body)
