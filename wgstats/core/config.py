import os
import re

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, None: 1.0}

WG_FORMATS = ("dump", "show")


def parse_duration(value: str) -> float:
    """
    Переводит "1s", "500ms", "2m" или просто "1.5" в секунды.
    """
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Некорректная длительность: {value!r}")
    seconds = float(match.group(1)) * _DURATION_UNITS[match.group(2)]
    if seconds <= 0:
        raise ValueError(f"Длительность должна быть положительной: {value!r}")
    return seconds


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Некорректное булево значение: {value!r}")


def parse_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    def __init__(self):
        # wg
        self.WG_BINARY = os.getenv("WG_BINARY", "/usr/bin/wg")
        self.WG_TIMEOUT = parse_duration(os.getenv("WG_TIMEOUT", "1s"))
        self.WG_USE_SUDO = parse_bool(os.getenv("WG_USE_SUDO", "false"))
        self.WG_DOCKER_CONTAINER = os.getenv("WG_DOCKER_CONTAINER", "")
        self.DOCKER_BIN = os.getenv("DOCKER_BIN", "docker")
        self.WG_FORMAT = os.getenv("WG_FORMAT", "dump").strip().lower()
        self.WG_INTERFACES = parse_list(os.getenv("WG_INTERFACES", ""))
        self.WG_REPORT_MALFORMED_LINES = parse_bool(
            os.getenv("WG_REPORT_MALFORMED_LINES", "true")
        )
        self.WG_PARSE_PARTIAL_OUTPUT = parse_bool(
            os.getenv("WG_PARSE_PARTIAL_OUTPUT", "false")
        )
        self.COLLECT_INTERVAL = parse_duration(os.getenv("COLLECT_INTERVAL", "10"))

        # JWT
        self.JWT_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_ACCESS_TTL = int(os.getenv("JWT_ACCESS_TTL", "900"))  # 15 минут
        self.JWT_REFRESH_TTL = int(os.getenv("JWT_REFRESH_TTL", "1209600"))  # 14 дней
        self.JWT_ISSUER = os.getenv("JWT_ISSUER", "wgstats")
        self.JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "wgstats-clients")

        # логин и пароль для доступа к метрикам
        self.ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
        self.ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "1234")

        self.validate()

    def validate(self):
        if not self.WG_BINARY.strip():
            raise ValueError("WG_BINARY не может быть пустым")
        if self.WG_FORMAT not in WG_FORMATS:
            raise ValueError(
                f"WG_FORMAT должен быть одним из {WG_FORMATS}, получено {self.WG_FORMAT!r}"
            )


settings = Settings()
