def _scaled(ns: int, unit: int) -> str:
    # Integer arithmetic, rounding half to even, so any int can be formatted
    tenths, rem = divmod(ns * 10, unit)
    if rem * 2 > unit or (rem * 2 == unit and tenths % 2):
        tenths += 1
    return f"{tenths // 10}.{tenths % 10}"


def format_duration(ns: int) -> str:
    """Format a nanosecond duration as a human-readable string.

    Formats:
    - < 1us: 999ns (integer nanoseconds)
    - < 1ms: 1.5us
    - < 1s: 12.3ms
    - >= 1s: 2.0s
    """
    if ns < 1_000:
        return f"{ns}ns"

    if ns < 1_000_000:
        return f"{_scaled(ns, 1_000)}us"

    if ns < 1_000_000_000:
        return f"{_scaled(ns, 1_000_000)}ms"

    return f"{_scaled(ns, 1_000_000_000)}s"
