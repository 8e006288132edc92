"""Low-level conversion of numbers into padded, signed text."""

from __future__ import annotations

import enum
import math

__all__ = ["Flags", "format_integer", "format_float"]

# Largest number of characters a single integer conversion may produce
# (padding spaces excluded).
NTOA_BUFFER_SIZE = 32
# Largest number of characters a single float conversion may produce
# (padding spaces excluded).
FTOA_BUFFER_SIZE = 32

# Values above this are not converted by format_float.
FLOAT_THRESHOLD = float(0x7FFFFFFF)

_MAX_FLOAT_PRECISION = 9


class Flags(enum.IntFlag):
    """Modifiers collected from a conversion specification."""

    ZEROPAD = 1 << 0
    LEFT = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    HASH = 1 << 4
    UPPERCASE = 1 << 5
    CHAR = 1 << 6
    SHORT = 1 << 7
    LONG = 1 << 8
    LONG_LONG = 1 << 9
    PRECISION = 1 << 10


_NO_FLAGS = Flags(0)


def _append_sign(buf: list[str], negative: bool, flags: Flags, limit: int) -> None:
    if len(buf) >= limit:
        return
    if negative:
        buf.append("-")
    elif flags & Flags.PLUS:
        buf.append("+")
    elif flags & Flags.SPACE:
        buf.append(" ")


def _pad(buf: list[str], width: int, flags: Flags) -> str:
    """Turn the reversed digit buffer into text, padded with spaces to width."""
    text = "".join(reversed(buf))
    if flags & Flags.LEFT:
        return text.ljust(width)
    if not flags & Flags.ZEROPAD:
        return text.rjust(width)
    return text


def _digit(value: int, flags: Flags) -> str:
    if value < 10:
        return chr(ord("0") + value)
    start = "A" if flags & Flags.UPPERCASE else "a"
    return chr(ord(start) + value - 10)


def _check_size(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


def format_integer(
    value: int,
    negative: bool,
    base: int,
    precision: int,
    width: int,
    flags: Flags | int,
) -> str:
    """Render the magnitude ``value`` in ``base`` with sign, prefix and padding.

    ``negative`` selects a leading minus sign; ``value`` itself is the
    absolute value. The result never holds more than 32 characters apart
    from padding spaces.
    """
    flags = Flags(flags)
    if value < 0:
        raise ValueError(f"value must be a magnitude, got {value}")
    if not 2 <= base <= 36:
        raise ValueError(f"base must be between 2 and 36, got {base}")
    _check_size("precision", precision)
    _check_size("width", width)

    if not value:
        flags &= ~Flags.HASH

    buf: list[str] = []
    if not flags & Flags.PRECISION or value:
        while True:
            value, remainder = divmod(value, base)
            buf.append(_digit(remainder, flags))
            if not value or len(buf) >= NTOA_BUFFER_SIZE:
                break

    limit = NTOA_BUFFER_SIZE
    if not flags & Flags.LEFT:
        if width and flags & Flags.ZEROPAD and (
            negative or flags & (Flags.PLUS | Flags.SPACE)
        ):
            width -= 1
        while len(buf) < precision and len(buf) < limit:
            buf.append("0")
        while flags & Flags.ZEROPAD and len(buf) < width and len(buf) < limit:
            buf.append("0")

    if flags & Flags.HASH:
        if (
            not flags & Flags.PRECISION
            and buf
            and (len(buf) == precision or len(buf) == width)
        ):
            buf.pop()
            if buf and base == 16:
                buf.pop()
        if len(buf) < limit:
            if base == 16:
                buf.append("X" if flags & Flags.UPPERCASE else "x")
            elif base == 2:
                buf.append("b")
        if len(buf) < limit:
            buf.append("0")

    _append_sign(buf, negative, flags, limit)
    return _pad(buf, width, flags)


def format_float(
    value: float,
    precision: int,
    width: int,
    flags: Flags | int,
) -> str:
    """Render ``value`` in fixed-point notation with sign and padding.

    Without ``Flags.PRECISION`` six decimals are used. NaN is rendered as
    ``nan`` without padding. Magnitudes above 2147483647 raise
    :class:`OverflowError`.
    """
    flags = Flags(flags)
    _check_size("precision", precision)
    _check_size("width", width)
    value = float(value)

    if math.isnan(value):
        return "nan"

    negative = value < 0
    if negative:
        value = -value

    prec = precision if flags & Flags.PRECISION else 6
    limit = FTOA_BUFFER_SIZE
    buf: list[str] = []
    while len(buf) < limit and prec > _MAX_FLOAT_PRECISION:
        buf.append("0")
        prec -= 1

    if value > FLOAT_THRESHOLD:
        raise OverflowError(f"{value!r} is too large for fixed-point output")

    scale = float(10**prec)
    whole = int(value)
    tmp = (value - whole) * scale
    frac = int(tmp)
    diff = tmp - frac

    if diff > 0.5:
        frac += 1
        if frac >= scale:
            frac = 0
            whole += 1
    elif diff < 0.5:
        pass
    elif frac == 0 or frac & 1:
        # exactly halfway: round up when odd or when the digit is zero
        frac += 1

    if prec == 0:
        diff = value - whole
        if (not diff < 0.5 or diff > 0.5) and whole & 1:
            whole += 1
    else:
        count = prec
        while len(buf) < limit:
            count -= 1
            frac, remainder = divmod(frac, 10)
            buf.append(str(remainder))
            if not frac:
                break
        if count < 0:
            # more digits than the precision asked for: fill the buffer
            buf.extend("0" * (limit - len(buf)))
        else:
            fill = min(count, max(limit - len(buf), 0))
            buf.extend("0" * fill)
        if len(buf) < limit:
            buf.append(".")

    while len(buf) < limit:
        whole, remainder = divmod(whole, 10)
        buf.append(str(remainder))
        if not whole:
            break

    if not flags & Flags.LEFT and flags & Flags.ZEROPAD:
        if width and (negative or flags & (Flags.PLUS | Flags.SPACE)):
            width -= 1
        while len(buf) < width and len(buf) < limit:
            buf.append("0")

    _append_sign(buf, negative, flags, limit)
    return _pad(buf, width, flags)