import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

# Host used when the function app is reached in-process
_IN_PROCESS_URL = "http://send-notification.internal/"


class NotificationDispatcherClient:
    """Calls the send-notification function.

    With ``url`` set the call goes over the network; otherwise ``app`` (the
    function's own ASGI app) is invoked through httpx's ASGI transport.
    Failures are logged and swallowed; nothing is retried.
    """

    def __init__(self, url: Optional[str] = None, app=None, timeout: float = 10.0):
        if not url and app is None:
            raise ValueError("either url or app is required")
        self.url = url
        self.app = app
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        if self.url:
            return httpx.AsyncClient(timeout=self.timeout)
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app), timeout=self.timeout)

    async def send(self, payload: Dict[str, Any], token: str) -> Optional[Dict[str, Any]]:
        target = self.url or _IN_PROCESS_URL
        try:
            async with self._client() as client:
                response = await client.post(
                    target,
                    json=payload,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as exc:
            logger.error("send-notification call for issue %s failed: %s", payload.get("issueId"), exc)
            return None

        if response.status_code != 200:
            logger.warning(
                "send-notification for issue %s returned %s: %s",
                payload.get("issueId"), response.status_code, response.text,
            )
            return None

        body = response.json()
        logger.info("notification email %s sent for issue %s", body.get("emailId"), payload.get("issueId"))
        return body
