from core.imports import datetime, timezone, Decimal

CENTS = Decimal("0.01")


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def money(value):
    """Render a currency amount as a fixed two-decimal string."""
    if value is None:
        return None
    return str(Decimal(value).quantize(CENTS))


def isoformat(value):
    return value.isoformat() if value else None
