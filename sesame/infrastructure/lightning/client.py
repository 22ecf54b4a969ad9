"""
LND REST client.
Mints invoices and streams invoice state updates for the payment watcher.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import re
import ssl
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from sesame.core.config import Settings
from sesame.domain.payments import InvoiceEvent, IssuedInvoice, PaymentNetworkError

logger = logging.getLogger(__name__)

MACAROON_HEADER = "Grpc-Metadata-macaroon"
STATE_SETTLED = "SETTLED"
STATE_CANCELED = "CANCELED"

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def macaroon_to_hex(value: str) -> str:
    """Accept a hex or base64 encoded macaroon and return it hex encoded."""
    value = value.strip()
    if _HEX_RE.match(value):
        return value.lower()
    try:
        return base64.b64decode(value, validate=True).hex()
    except binascii.Error as exc:
        raise ValueError("macaroon must be hex or base64 encoded") from exc


def build_ssl_context(cert: str) -> ssl.SSLContext:
    """Trust the node's self-signed certificate, given as PEM or base64."""
    cert = cert.strip()
    if "BEGIN CERTIFICATE" in cert:
        return ssl.create_default_context(cadata=cert)
    try:
        raw = base64.b64decode(cert, validate=True)
    except binascii.Error as exc:
        raise ValueError("cert must be PEM or base64 encoded") from exc
    if raw.lstrip().startswith(b"-----BEGIN"):
        return ssl.create_default_context(cadata=raw.decode("ascii"))
    return ssl.create_default_context(cadata=raw)


def _hash_to_hex(r_hash: str) -> str:
    return base64.b64decode(r_hash).hex()


def _hex_to_urlsafe(invoice_id: str) -> str:
    return base64.urlsafe_b64encode(bytes.fromhex(invoice_id)).decode("ascii")


class LndRestClient:
    """Payment network backed by an LND node's REST gateway."""

    def __init__(
        self,
        *,
        rest_url: str,
        macaroon: str,
        cert: str | None = None,
        timeout: float = 10.0,
        expiry_seconds: int = 3600,
        memo: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._rest_url = rest_url.rstrip("/")
        self._headers = {MACAROON_HEADER: macaroon_to_hex(macaroon)}
        self._verify: ssl.SSLContext | bool = build_ssl_context(cert) if cert else True
        self._timeout = timeout
        self._expiry_seconds = expiry_seconds
        self._memo = memo
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LndRestClient":
        return cls(
            rest_url=settings.lightning.rest_url,
            macaroon=settings.lightning.macaroon,
            cert=settings.lightning.cert,
            timeout=settings.lightning.timeout,
            expiry_seconds=settings.invoice.expiry_seconds,
            memo=settings.invoice.memo,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._rest_url,
                headers=self._headers,
                verify=self._verify,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def create_invoice(self, tokens: int) -> IssuedInvoice:
        payload = {
            "value": str(tokens),
            "expiry": str(self._expiry_seconds),
            "memo": self._memo,
        }
        try:
            response = await self.client.post("/v1/invoices", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise PaymentNetworkError(f"invoice creation failed: {exc}") from exc
        except ValueError as exc:
            raise PaymentNetworkError("invoice creation returned invalid JSON") from exc

        try:
            invoice = IssuedInvoice(id=_hash_to_hex(data["r_hash"]), request=data["payment_request"])
        except (KeyError, TypeError, binascii.Error) as exc:
            raise PaymentNetworkError(f"unexpected invoice payload: {data!r}") from exc
        logger.debug("LND invoice created", extra={"invoice_id": invoice.id})
        return invoice

    async def subscribe_to_invoice(self, invoice_id: str) -> AsyncGenerator[InvoiceEvent, None]:
        path = f"/v2/invoices/subscribe/{_hex_to_urlsafe(invoice_id)}"
        timeout = httpx.Timeout(self._timeout, read=None)
        try:
            async with self.client.stream("GET", path, timeout=timeout) as response:
                if response.status_code != httpx.codes.OK:
                    await response.aread()
                    raise PaymentNetworkError(
                        f"invoice subscription rejected with {response.status_code}: {response.text}"
                    )
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    yield self._parse_update(invoice_id, line)
        except httpx.HTTPError as exc:
            raise PaymentNetworkError(f"invoice subscription failed: {exc}") from exc

    @staticmethod
    def _parse_update(invoice_id: str, line: str) -> InvoiceEvent:
        try:
            message: dict[str, Any] = json.loads(line)
        except ValueError as exc:
            raise PaymentNetworkError(f"invalid subscription message: {line!r}") from exc
        if not isinstance(message, dict):
            raise PaymentNetworkError(f"unexpected subscription message: {line!r}")
        if "error" in message:
            raise PaymentNetworkError(f"invoice subscription error: {message['error']}")
        result = message.get("result", message)
        try:
            state = result.get("state")
            r_hash = result.get("r_hash")
            event_id = _hash_to_hex(r_hash) if r_hash else invoice_id
        except (AttributeError, TypeError, binascii.Error) as exc:
            raise PaymentNetworkError(f"unexpected subscription payload: {line!r}") from exc
        return InvoiceEvent(
            id=event_id,
            is_confirmed=state == STATE_SETTLED or bool(result.get("settled")),
            is_canceled=state == STATE_CANCELED,
        )
