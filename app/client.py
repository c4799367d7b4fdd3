"""Client data layer: REST calls against the GSI API with a response cache.

GET responses are cached by path and query string. Any successful POST, PUT or
DELETE drops the cached entries for the collection it touched (and everything
beneath it) before the next read, together with every derived view listed
for that collection in DEPENDENT_PATHS and the dashboard.
"""
import logging
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
DERIVED_PATHS = ("/api/dashboard",)

# collection -> other collections whose responses embed data computed from it
DEPENDENT_PATHS = {
    "/api/evaluations": ("/api/projects",),
    "/api/employees": ("/api/reports",),
    "/api/projects": ("/api/reports",),
    "/api/tasks": ("/api/reports",),
    "/api/transactions": ("/api/reports",),
    "/api/kpis": ("/api/reports",),
}


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, errors: list | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            return cls(response.status_code, body.get("message") or response.reason_phrase, body.get("errors"))
        return cls(response.status_code, response.text or response.reason_phrase)


def collection_path(path: str) -> str:
    """``/api/employees/emp-1`` -> ``/api/employees``."""
    parts = [p for p in path.split("?", 1)[0].split("/") if p]
    if parts and parts[0] == API_PREFIX.strip("/"):
        return "/" + "/".join(parts[:2])
    return "/" + "/".join(parts[:1])


def _cache_key(path: str, params: dict | None) -> str:
    if not params:
        return path
    query = urlencode(sorted((k, v) for k, v in params.items() if v is not None))
    return f"{path}?{query}" if query else path


def _is_beneath(key: str, prefix: str) -> bool:
    path = key.split("?", 1)[0]
    return path == prefix or path.startswith(prefix + "/")


class ApiClient:
    def __init__(self, http: httpx.Client):
        self.http = http
        self._cache: dict[str, object] = {}
        self._token: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self._token}"} if self._token else {}

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = self.http.request(method, path, headers=self._headers(), **kwargs)
        if response.is_error:
            logger.debug("%s %s failed with %s", method, path, response.status_code)
            raise ApiError.from_response(response)
        return response

    def invalidate(self, path: str) -> None:
        collection = collection_path(path)
        prefixes = (collection,) + DEPENDENT_PATHS.get(collection, ()) + DERIVED_PATHS
        for key in [k for k in self._cache if any(_is_beneath(k, p) for p in prefixes)]:
            del self._cache[key]

    def clear_cache(self) -> None:
        self._cache.clear()

    def get(self, path: str, params: dict | None = None):
        key = _cache_key(path, params)
        if key in self._cache:
            return self._cache[key]
        query = {k: v for k, v in (params or {}).items() if v is not None}
        data = self._send("GET", path, params=query).json()
        self._cache[key] = data
        return data

    def _mutate(self, method: str, path: str, json=None):
        response = self._send(method, path, json=json)
        self.invalidate(path)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def post(self, path: str, json=None):
        return self._mutate("POST", path, json=json)

    def put(self, path: str, json=None):
        return self._mutate("PUT", path, json=json)

    def delete(self, path: str):
        return self._mutate("DELETE", path)

    # resource helpers

    def list(self, resource: str, **filters):
        return self.get(f"{API_PREFIX}/{resource}", params=filters or None)

    def retrieve(self, resource: str, record_id: str):
        return self.get(f"{API_PREFIX}/{resource}/{record_id}")

    def create(self, resource: str, data: dict):
        return self.post(f"{API_PREFIX}/{resource}", json=data)

    def update(self, resource: str, record_id: str, data: dict):
        return self.put(f"{API_PREFIX}/{resource}/{record_id}", json=data)

    def remove(self, resource: str, record_id: str) -> None:
        self.delete(f"{API_PREFIX}/{resource}/{record_id}")

    def login(self, email: str, password: str) -> dict:
        result = self.post(f"{API_PREFIX}/auth/login", json={"email": email, "password": password})
        self._token = result["token"]
        return result["user"]

    def logout(self) -> None:
        self._token = None
        self.clear_cache()

    def dashboard_stats(self) -> dict:
        return self.get(f"{API_PREFIX}/dashboard/stats")

    def download_report(self, report_id: str, format: str = "excel") -> bytes:
        response = self._send("GET", f"{API_PREFIX}/reports/{report_id}/download", params={"format": format})
        return response.content
