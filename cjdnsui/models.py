from dataclasses import dataclass, field
from typing import Iterable

from cjdnsui.errors import StatusParseError


@dataclass
class Status:
    cjdns_ip: str = ""
    public_key: str = ""
    port: int = 0


@dataclass
class Settings:
    authorized_passwords: list[str] = field(default_factory=list)
    admin_address: str = ""
    admin_password: str = ""


def parse_port(text: str) -> int:
    """Parse the displayed port text as a base-10 integer."""
    try:
        return int(text, 10)
    except (TypeError, ValueError) as exc:
        raise StatusParseError(f"port is not an integer: {text!r}") from exc


def strip_whitespace(line: str) -> str:
    # Every whitespace character, not only the leading and trailing ones.
    return "".join(ch for ch in line if not ch.isspace())


def parse_authorized_passwords(text: str) -> list[str]:
    """One password per line; blank lines are dropped, order is kept."""
    passwords: list[str] = []
    for line in text.splitlines():
        password = strip_whitespace(line)
        if password:
            passwords.append(password)
    return passwords


def format_authorized_passwords(passwords: Iterable[str]) -> str:
    return "\n".join(passwords)
