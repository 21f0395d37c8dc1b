import logging
from datetime import datetime, timezone

import requests

# Settings
from free_gift.config.settings import FreeGiftConfigs
configs = FreeGiftConfigs()


class SlackErrorHandler(logging.Handler):
    """Sends ERROR and CRITICAL logs to Slack"""
    def __init__(self):
        super().__init__(level=logging.ERROR)
        self.webhook = configs.SLACK_WEBHOOK_URL
        self.enabled = bool(self.webhook) and configs.APPLICATION_ENVIRONMENT.lower() == 'local'

    def build_text(self, record) -> str:
        env = configs.APPLICATION_ENVIRONMENT.upper()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

        lines = [
            "Alerting Notification action",
            "",
            f":mag: Monitor {env}-MONITOR Please investigate the issue.",
            "",
            "Error Details",
            f"- :clock1: Timestamp: {ts}",
            f"- :triangular_flag_on_post: Level: **{record.levelname}**",
            f"- :warning: Logger: {record.name}",
            f"- :satellite: Service: {configs.APP_NAME}",
            f"- :globe_with_meridians: Environment: {env}",
            f"- :file_folder: Module: {getattr(record, 'module', '')}",
            f"- :pushpin: Function: {getattr(record, 'funcName', '')}",
            f"- :straight_ruler: Line Number: {getattr(record, 'lineno', '')}",
            "- :memo: Message:",
            "",
            "```" + str(record.getMessage()) + "```",
        ]
        return "\n".join(lines)

    def emit(self, record):
        if not self.enabled:
            return
        try:
            requests.post(self.webhook, json={"text": self.build_text(record)}, timeout=2)
        except requests.RequestException:
            self.handleError(record)


slack_handler = SlackErrorHandler()
