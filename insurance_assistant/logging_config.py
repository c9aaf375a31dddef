"""
Logging setup shared by the API and the service layer
"""
import logging
import re
import sys

_CONFIGURED = False


class SensitiveDataFilter(logging.Filter):
    """Mask API keys and bearer tokens that end up in log messages"""

    SENSITIVE_PATTERNS = [
        (r'key=([^&\s"]+)', r"key=***"),
        (r'api[_-]?key["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'api_key": "***"'),
        (r'Bearer\s+([^\s"]+)', r"Bearer ***"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            for pattern, replacement in self.SENSITIVE_PATTERNS:
                record.msg = re.sub(pattern, replacement, record.msg, flags=re.IGNORECASE)
        if isinstance(record.args, tuple):
            masked = []
            for arg in record.args:
                if isinstance(arg, str):
                    for pattern, replacement in self.SENSITIVE_PATTERNS:
                        arg = re.sub(pattern, replacement, arg, flags=re.IGNORECASE)
                masked.append(arg)
            record.args = tuple(masked)
        return True


def setup_logging(level: str = "INFO") -> None:
    global _CONFIGURED
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    handler.addFilter(SensitiveDataFilter())
    root.addHandler(handler)

    # httpx logs full request URLs (search key included) at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _CONFIGURED = True
