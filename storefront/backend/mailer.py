"""Outbound email through the Resend HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storefront.state.settings import EmailSettings
from storefront.state.email import EmailMessage, EmailReceipt
from storefront.errors import ConfigurationError, EmailDeliveryError

logger = logging.getLogger(__name__)


def _describe_failure(status_code: int) -> str:
    if status_code in (401, 403):
        return f"email provider denied access: unauthorized (status {status_code})"
    if status_code == 422:
        return f"email provider rejected the message: validation failed (status {status_code})"
    if status_code == 429:
        return f"email provider rate limit reached (status {status_code})"
    if status_code >= 500:
        return f"email service unavailable (status {status_code})"
    return f"email provider rejected the request (status {status_code})"


class ResendMailer:
    def __init__(self, settings: EmailSettings, *, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def configured(self) -> bool:
        return self._settings.configured

    @property
    def recipient(self) -> str:
        return self._settings.to_email

    def require_configured(self) -> None:
        missing = [
            name
            for name, value in (
                ("RESEND_API_KEY", self._settings.api_key),
                ("RESEND_FROM_EMAIL", self._settings.from_email),
                ("RESEND_TO_EMAIL", self._settings.to_email),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing email configuration: {', '.join(missing)}")

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout_s)
        return self._client

    async def send(self, message: EmailMessage) -> EmailReceipt:
        self.require_configured()

        payload: dict[str, Any] = {
            "from": self._settings.from_email,
            "to": list(message.to),
            "subject": message.subject,
            "text": message.text,
        }
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        if message.headers:
            payload["headers"] = dict(message.headers)

        url = f"{self._settings.api_url.rstrip('/')}/emails"
        try:
            response = await self._get_client().post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self._settings.api_key}"},
                timeout=self._settings.timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise TimeoutError("email service request timed out") from exc
        except httpx.TransportError as exc:
            raise EmailDeliveryError(f"email service unreachable: {exc}") from exc

        if response.status_code >= 400:
            logger.warning("email send failed with status %s", response.status_code)
            raise EmailDeliveryError(_describe_failure(response.status_code), code=str(response.status_code))

        try:
            body = response.json()
        except ValueError:
            body = {}
        return EmailReceipt(message_id=body.get("id") if isinstance(body, dict) else None)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


__all__ = ["ResendMailer"]
