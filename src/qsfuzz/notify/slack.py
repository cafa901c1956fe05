# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Slack notifications for confirmed matches."""

from __future__ import annotations

import httpx

from ..config import DEFAULT_TIMEOUT
from ..errors import NotificationError
from ..models.config import SlackConfig

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"


class SlackNotifier:
    """Posts each message as a code block through ``chat.postMessage``."""

    def __init__(self, config: SlackConfig, client: httpx.Client | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def notify(self, message: str) -> None:
        payload = {"channel": self.config.channel, "text": f"```{message}```"}
        try:
            resp = self._client.post(
                SLACK_POST_MESSAGE_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.config.bot_token}"},
            )
            body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise NotificationError(f"slack request failed: {exc}") from exc

        if not isinstance(body, dict) or not body.get("ok"):
            error = body.get("error") if isinstance(body, dict) else None
            raise NotificationError(str(error or "unexpected response from Slack"))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
