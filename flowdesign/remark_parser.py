"""Pressure extraction from free-text remarks."""

DEFAULT_PRESSURE_MPA = 0.5
BAR_TO_MPA = 0.1

_NUMBER_CHARS = frozenset("0123456789.-")


def _number_before(lowered: str, token: str) -> float | None:
    # Only the leftmost occurrence counts, and it needs room for a number.
    idx = lowered.find(token)
    if idx <= 0:
        return None
    start = idx
    while start > 0 and lowered[start - 1] in _NUMBER_CHARS:
        start -= 1
    if start == idx:
        return None
    try:
        return float(lowered[start:idx])
    except ValueError:
        return None


def extract_pressure(remark: str) -> float:
    """Return the pressure (MPa) mentioned in ``remark``.

    ``"2.5MPa"`` is read as-is and ``"10bar"`` is converted to 1.0 MPa. MPa
    takes priority over bar; when neither yields a number the default of
    0.5 MPa is returned.
    """

    remark = remark or ""
    lowered = remark.lower()

    value = _number_before(lowered, "mpa")
    if value is not None:
        return value

    value = _number_before(lowered, "bar")
    if value is not None:
        return value * BAR_TO_MPA

    return DEFAULT_PRESSURE_MPA
