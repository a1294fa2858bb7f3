from __future__ import annotations

import contextlib
import logging
import re
from pathlib import Path

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import NotFoundError, NotYetAnchoredError, ProofSourceError, ServerError
from ..merkle.digest import Digest
from ..merkle.proof import Proof
from ..settings import settings

HTTP_RE = re.compile(r"^https?://", re.IGNORECASE)


class StampRequest(BaseModel):
    hash: str


class StampResponse(BaseModel):
    url: str


def is_url(value: str) -> bool:
    return HTTP_RE.match(value) is not None


@contextlib.contextmanager
def _client_or_default(client: httpx.Client | None, timeout: float | None):
    if client is not None:
        yield client
        return
    with httpx.Client(timeout=timeout or settings.http_timeout, follow_redirects=True) as c:
        yield c


def fetch_proof_bytes(url: str, *, timeout: float | None = None, _client: httpx.Client | None = None) -> bytes:
    """GET a serialized proof.

    404 means the proof was never posted or has expired; 202 means it will be
    published with the next Merkle root.
    """
    with _client_or_default(_client, timeout) as client:
        try:
            r = client.get(url)
        except httpx.HTTPError as e:
            raise ServerError(f"Unable to fetch proof {url!r}: {e}") from e
    logging.debug("GET %s -> %s", url, r.status_code)
    if r.status_code == 404:
        raise NotFoundError(f"Requested proof {url!r} hasn't been posted to the server or has expired")
    if r.status_code == 202:
        raise NotYetAnchoredError(f"Requested proof {url!r} will be posted with the next merkle root")
    if r.status_code != 200:
        raise ServerError(f"Unexpected status {r.status_code} fetching proof {url!r}")
    return r.content


def fetch_proof(url: str, *, timeout: float | None = None, _client: httpx.Client | None = None) -> Proof:
    return Proof.parse(fetch_proof_bytes(url, timeout=timeout, _client=_client))


def read_proof_file(path: str | Path) -> Proof:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ProofSourceError(f"Unable to read proof file {str(path)!r}: {e.strerror or e}") from e
    return Proof.parse(data)


def load_proof(source: str, *, timeout: float | None = None, _client: httpx.Client | None = None) -> Proof:
    """Load a proof from a URL or a local file."""
    if is_url(source):
        return fetch_proof(source, timeout=timeout, _client=_client)
    return read_proof_file(source)


def submit_stamp(
    digest: Digest,
    server: str | None = None,
    *,
    timeout: float | None = None,
    _client: httpx.Client | None = None,
) -> str:
    """POST a digest to the stamping endpoint and return the URL of its future proof."""
    url = settings.stamp_url(server)
    body = StampRequest(hash=digest.to_hex()).model_dump()
    with _client_or_default(_client, timeout) as client:
        try:
            r = client.post(url, json=body)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ServerError(f"Stamp request for {digest.to_hex()} failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ServerError(f"Unable to reach stamping server {url!r}: {e}") from e
    logging.debug("POST %s (%s) -> %s", url, digest.to_hex(), r.status_code)
    try:
        return StampResponse.model_validate_json(r.content).url
    except ValidationError as e:
        raise ServerError(f"Stamping server returned an invalid response: {e.errors()[0]['msg']}") from e


__all__ = [
    "StampRequest",
    "StampResponse",
    "is_url",
    "fetch_proof",
    "fetch_proof_bytes",
    "read_proof_file",
    "load_proof",
    "submit_stamp",
]
