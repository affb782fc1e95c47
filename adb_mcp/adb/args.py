"""Argument helpers: splitting caller strings into argv and device selection."""

_SINGLE_QUOTE = "'"
_DOUBLE_QUOTE = '"'
_BACKSLASH = "\\"


def tokenize(raw: str | None) -> list[str]:
    """
    Split a free-form argument string into argv tokens.

    Follows shell conventions closely enough for familiarity, but the
    result is always passed to adb as a list and never re-interpreted by
    a shell.

    Rules:
        - Whitespace outside quotes separates tokens; runs collapse.
        - Single quotes keep everything literal up to the closing quote.
        - Double quotes keep whitespace and single quotes literal, but a
          backslash still escapes the next character.
        - Outside quotes a backslash makes the next character literal. A
          trailing backslash with nothing after it is kept as is.
        - Quotes that produce an empty token yield nothing.

    Args:
        raw: The argument string, e.g. ``-a android.intent.action.VIEW -d 'x y'``.

    Returns:
        The token list. Empty or whitespace-only input gives ``[]``.

    Example:
        >>> tokenize("a 'b c' d")
        ['a', 'b c', 'd']
    """
    if not raw:
        return []

    tokens: list[str] = []
    current: list[str] = []
    in_single = False
    in_double = False
    escape_next = False

    for char in raw:
        if escape_next:
            current.append(char)
            escape_next = False
            continue

        if in_single:
            if char == _SINGLE_QUOTE:
                in_single = False
            else:
                current.append(char)
            continue

        if char == _BACKSLASH:
            escape_next = True
            continue

        if char == _DOUBLE_QUOTE:
            in_double = not in_double
            continue

        if in_double:
            current.append(char)
            continue

        if char == _SINGLE_QUOTE:
            in_single = True
            continue

        if char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
            continue

        current.append(char)

    if escape_next:
        current.append(_BACKSLASH)

    if current:
        tokens.append("".join(current))

    return tokens


def device_args(device: str | None) -> list[str]:
    """Get the argv prefix that targets a specific device, if one is given."""
    if device and device.strip():
        return ["-s", device.strip()]
    return []
