# utils/validators.py

def non_empty(text: str) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Numeric parsing & validators ----

def try_parse_float(x):
    """
    Best-effort parse to float.

    Returns:
        (ok: bool, value: float|None)

    ok == False means parsing failed and value is None.
    """
    if x is None or isinstance(x, bool):
        return False, None
    if isinstance(x, str):
        x = x.strip().replace(",", "")
        if not x:
            return False, None
    try:
        val = float(x)
    except (TypeError, ValueError):
        return False, None
    if val != val or val in (float("inf"), float("-inf")):
        return False, None
    return True, val


def try_parse_int(x):
    """
    Parse a whole number. "3" and "3.0" are accepted, "2.5" is not.

    Returns:
        (ok: bool, value: int|None)
    """
    ok, val = try_parse_float(x)
    if not ok or val is None or not float(val).is_integer():
        return False, None
    return True, int(val)


def optional_float(x):
    """Parsed float, or None when the input is blank or not a number."""
    ok, val = try_parse_float(x)
    return val if ok else None


def optional_int(x):
    """Parsed whole number, or None when the input is blank or not whole."""
    ok, val = try_parse_int(x)
    return val if ok else None
