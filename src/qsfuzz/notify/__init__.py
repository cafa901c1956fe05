# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .slack import SLACK_POST_MESSAGE_URL, SlackNotifier

__all__ = ["SLACK_POST_MESSAGE_URL", "SlackNotifier"]
