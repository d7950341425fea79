"""
Firestore document store over the REST API (v1).

Manifesto:
    The dashboard only reads, so it does not need the full Firebase SDK.
    Three REST calls cover the whole read surface: list a collection, get
    one document, run a structured query with an ``IN`` filter.  An
    ``httpx.AsyncClient`` keeps every call a coroutine on the event loop.

Features:
    - **list_collection():** ``GET .../documents/<path>`` with internal
      ``nextPageToken`` paging, so callers see one materialised list
    - **get_document():** ``GET .../documents/<path>/<id>``, 404 → ``None``
    - **query_membership():** ``POST ...:runQuery`` with an ``IN`` filter
      on ``__name__`` (reference values) or a plain string field
    - **Typed value decoding:** Firestore ``{"stringValue": ...}`` wrappers
      become plain Python values

Error mapping:
    ======================================  ===========================
    httpx transport error / closed client   StoreUnavailableError
    HTTP 429, 5xx                           StoreUnavailableError
    HTTP 401, 403                           StorePermissionError
    any other non-2xx                       StoreQueryError
    ======================================  ===========================

Tags:
    ceremony-spine, store, firestore, httpx, rest, async

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

import httpx

from ceremony_spine.core.errors import (
    ErrorContext,
    MembershipLimitError,
    StorePermissionError,
    StoreQueryError,
    StoreUnavailableError,
)
from ceremony_spine.core.logging import get_logger
from ceremony_spine.models.documents import DocumentReference
from ceremony_spine.store.base import (
    DOCUMENT_ID_FIELD,
    MEMBERSHIP_FILTER_LIMIT,
    DocumentSnapshot,
)

__all__ = ["FirestoreDocumentStore", "decode_value", "decode_fields"]

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://firestore.googleapis.com/v1"


# ── Value decoding ───────────────────────────────────────────────────────


def decode_value(value: dict[str, Any]) -> Any:
    """Decode one Firestore typed value into a plain Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        # int64 travels as a string
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    if "geoPointValue" in value:
        return dict(value["geoPointValue"])
    for key in ("stringValue", "timestampValue", "referenceValue", "bytesValue"):
        if key in value:
            return value[key]
    raise StoreQueryError(f"Unsupported Firestore value: {sorted(value)}")


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {name: decode_value(value) for name, value in fields.items()}


class FirestoreDocumentStore:
    """Read-only Firestore adapter implementing ``DocumentStore``.

    Example::

        async with FirestoreDocumentStore("my-project", api_key="...") as store:
            ceremonies = await store.list_collection("ceremonies")
    """

    def __init__(
        self,
        project_id: str,
        *,
        api_key: str | None = None,
        id_token: str | None = None,
        database: str = "(default)",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        page_size: int = 300,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            project_id: Firebase/GCP project id.
            api_key: Web API key, sent as the ``key`` query parameter.
            id_token: Optional Firebase Auth ID token (bearer auth).
            database: Firestore database id.
            base_url: REST endpoint root.
            timeout: Per-request timeout in seconds.
            page_size: Documents per listing page.
            transport: Custom httpx transport (tests use ``MockTransport``).
        """
        self.project_id = project_id
        self.root = f"projects/{project_id}/databases/{database}/documents"
        self._api_key = api_key
        self._page_size = page_size
        self._closed = False
        headers = {"Authorization": f"Bearer {id_token}"} if id_token else None
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> FirestoreDocumentStore:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ── DocumentStore protocol ───────────────────────────────────────

    async def list_collection(self, path: str) -> list[DocumentSnapshot]:
        path = path.strip("/")
        context = ErrorContext(collection_path=path)
        snapshots: list[DocumentSnapshot] = []
        page_token: str | None = None

        while True:
            params: dict[str, Any] = {"pageSize": self._page_size}
            if page_token:
                params["pageToken"] = page_token
            response = await self._request("GET", f"/{self.root}/{path}", context, params=params)
            payload = response.json()

            snapshots.extend(self._decode_document(raw) for raw in payload.get("documents", []))

            page_token = payload.get("nextPageToken")
            if not page_token:
                break

        logger.debug("firestore.list_collection", path=path, documents=len(snapshots))
        return snapshots

    async def get_document(self, path: str, document_id: str) -> DocumentSnapshot | None:
        path = path.strip("/")
        context = ErrorContext(collection_path=path, document_id=document_id)
        response = await self._request(
            "GET", f"/{self.root}/{path}/{document_id}", context, allow_not_found=True,
        )
        if response.status_code == 404:
            return None
        return self._decode_document(response.json())

    async def query_membership(
        self,
        collection: str,
        field: str,
        values: list[str],
    ) -> list[DocumentSnapshot]:
        if len(values) > MEMBERSHIP_FILTER_LIMIT:
            raise MembershipLimitError(len(values), MEMBERSHIP_FILTER_LIMIT)
        if not values:
            return []

        collection = collection.strip("/")
        parent, _, collection_id = collection.rpartition("/")
        url = f"/{self.root}/{parent}:runQuery" if parent else f"/{self.root}:runQuery"

        if field == DOCUMENT_ID_FIELD:
            encoded = [{"referenceValue": f"{self.root}/{collection}/{v}"} for v in values]
        else:
            encoded = [{"stringValue": v} for v in values]

        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection_id}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": field},
                        "op": "IN",
                        "value": {"arrayValue": {"values": encoded}},
                    }
                },
            }
        }
        context = ErrorContext(collection_path=collection, metadata={"values": len(values)})
        response = await self._request("POST", url, context, json=body)

        # runQuery streams one entry per result; entries without "document"
        # only carry readTime/skippedResults.
        return [
            self._decode_document(entry["document"])
            for entry in response.json()
            if "document" in entry
        ]

    async def close(self) -> None:
        """Close HTTP client."""
        self._closed = True
        await self._client.aclose()

    # ── Internals ────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        url: str,
        context: ErrorContext,
        *,
        allow_not_found: bool = False,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        if self._closed:
            raise StoreUnavailableError("Firestore client is closed", context=context)

        params = dict(params or {})
        if self._api_key:
            params["key"] = self._api_key
        context.url = url

        try:
            response = await self._client.request(method, url, params=params, json=json)
        except httpx.TransportError as exc:
            raise StoreUnavailableError(
                f"Firestore unreachable: {exc}", context=context, cause=exc,
            ) from exc

        if response.is_success or (allow_not_found and response.status_code == 404):
            return response

        status = response.status_code
        context.http_status = status
        detail = _error_detail(response)
        if status == 429 or status >= 500:
            raise StoreUnavailableError(f"Firestore unavailable ({status}): {detail}", context=context)
        if status in (401, 403):
            raise StorePermissionError(f"Firestore denied read ({status}): {detail}", context=context)
        raise StoreQueryError(f"Firestore rejected request ({status}): {detail}", context=context)

    def _decode_document(self, raw: dict[str, Any]) -> DocumentSnapshot:
        # name: projects/<p>/databases/<d>/documents/<collection path>/<id>
        path = raw["name"].split("/documents/", 1)[1]
        reference = DocumentReference(path)
        return DocumentSnapshot(
            id=reference.id,
            reference=reference,
            data=decode_fields(raw.get("fields", {})),
        )


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(payload)[:200]
