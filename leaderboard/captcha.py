"""Google reCAPTCHA verification."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from django.conf import settings

from .exceptions import UpstreamUnavailable


logger = logging.getLogger(__name__)

VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
TIMEOUT = 10


class CaptchaVerifier:
    """Checks reCAPTCHA tokens against the ``siteverify`` endpoint."""

    def __init__(
        self,
        secret: str,
        *,
        url: str = VERIFY_URL,
        timeout: float = TIMEOUT,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.secret = secret
        self.url = url
        self.timeout = timeout
        self.http = http or requests.Session()

    def verify(self, token: str, remote_ip: Optional[str] = None) -> bool:
        data = {"secret": self.secret, "response": token}
        if remote_ip:
            data["remoteip"] = remote_ip

        try:
            response = self.http.post(self.url, data=data, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Recaptcha verification error: %s", exc)
            raise UpstreamUnavailable("Recaptcha verification error") from exc

        if not payload.get("success"):
            logger.warning("Recaptcha rejected token: %s", payload.get("error-codes", []))
            return False
        return True


def get_verifier() -> Optional[CaptchaVerifier]:
    """Return a verifier, or ``None`` when no secret is configured."""

    secret = getattr(settings, "RECAPTCHA_SECRET_KEY", "")
    if not secret:
        return None
    return CaptchaVerifier(
        secret,
        url=getattr(settings, "RECAPTCHA_VERIFY_URL", VERIFY_URL),
        timeout=getattr(settings, "RECAPTCHA_TIMEOUT", TIMEOUT),
    )
