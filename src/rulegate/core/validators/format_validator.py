"""
Format validators: emails, URLs, IP addresses and dates.
"""

import ipaddress
import re
from collections.abc import Sequence
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from .base_validator import BaseValidator, param

_EMAIL_RE = re.compile(r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)+")


class EmailValidator(BaseValidator):
    """Value must look like an email address."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None

    @property
    def rule_name(self) -> str:
        return "valid_email"


class UrlValidator(BaseValidator):
    """Value must be an absolute URL with a scheme and a host."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        if not isinstance(value, str) or any(c.isspace() for c in value):
            return False
        parsed = urlparse(value)
        return bool(parsed.scheme) and bool(parsed.netloc)

    @property
    def rule_name(self) -> str:
        return "valid_url"


class IpValidator(BaseValidator):
    """Value must be an IPv4 or IPv6 address."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        try:
            ipaddress.ip_address(str(value))
        except ValueError:
            return False
        return True

    @property
    def rule_name(self) -> str:
        return "valid_ip"


class DateValidator(BaseValidator):
    """
    Value must be a date.

    params[0], when given, is a strptime format ("%d/%m/%Y"); otherwise
    any ISO 8601 date or datetime is accepted.
    """

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        if not isinstance(value, str):
            return False

        date_format = param(params, 0)
        try:
            if date_format:
                datetime.strptime(value, str(date_format))
            else:
                datetime.fromisoformat(value)
        except ValueError:
            return False
        return True

    @property
    def rule_name(self) -> str:
        return "date"
