"""Domain models and helpers used across application layer boundaries."""

from .models import HealthStatus
from .numeric import domain_normalize_optional_text, domain_parse_ledger_date, domain_parse_optional_decimal

__all__ = [
    "HealthStatus",
    "domain_normalize_optional_text",
    "domain_parse_ledger_date",
    "domain_parse_optional_decimal",
]
