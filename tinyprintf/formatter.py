"""printf-style formatting of Python values into text.

Conversion specifications follow ``%[flags][width][.precision][length]type``
with the types ``d i u x X o b f F c s p %``. Integer arguments are wrapped
to the width of the C type the length modifier names (``int`` is 32 bits,
``long`` and ``long long`` are 64 bits), so ``%u`` of ``-1`` gives the
largest 32-bit value.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .convert import Flags, format_float, format_integer

__all__ = [
    "FormatSpec",
    "parse_format",
    "format",
    "sprintf",
    "snprintf",
    "vsnprintf",
    "fctprintf",
    "printf",
]

_FLAG_CHARS = {
    "0": Flags.ZEROPAD,
    "-": Flags.LEFT,
    "+": Flags.PLUS,
    " ": Flags.SPACE,
    "#": Flags.HASH,
}
_DIGITS = "0123456789"
_INTEGER_BASES = {"d": 10, "i": 10, "u": 10, "x": 16, "X": 16, "o": 8, "b": 2}
_SIGNED = "di"
_POINTER_BITS = 64
_POINTER_WIDTH = _POINTER_BITS // 4


@dataclass(frozen=True)
class FormatSpec:
    """One parsed conversion specification.

    Length modifiers are folded into ``flags``. When ``width_from_args`` or
    ``precision_from_args`` is set, the value is taken from the arguments at
    formatting time instead of ``width`` or ``precision``.
    """

    specifier: str
    flags: Flags = Flags(0)
    width: int = 0
    precision: int = 0
    width_from_args: bool = False
    precision_from_args: bool = False


def _read_number(fmt: str, pos: int) -> tuple[int, int]:
    end = pos
    while end < len(fmt) and fmt[end] in _DIGITS:
        end += 1
    return int(fmt[pos:end]), end


def parse_format(fmt: str) -> Iterator[str | FormatSpec]:
    """Split ``fmt`` into literal text runs and :class:`FormatSpec` items.

    Raises :class:`ValueError` when the string ends inside a specification.
    """
    end = len(fmt)
    pos = 0
    while pos < end:
        start = fmt.find("%", pos)
        if start < 0:
            yield fmt[pos:]
            return
        if start > pos:
            yield fmt[pos:start]
        pos = start + 1

        flags = Flags(0)
        while pos < end and fmt[pos] in _FLAG_CHARS:
            flags |= _FLAG_CHARS[fmt[pos]]
            pos += 1

        width = 0
        width_from_args = False
        if pos < end and fmt[pos] in _DIGITS:
            width, pos = _read_number(fmt, pos)
        elif pos < end and fmt[pos] == "*":
            width_from_args = True
            pos += 1

        precision = 0
        precision_from_args = False
        if pos < end and fmt[pos] == ".":
            flags |= Flags.PRECISION
            pos += 1
            if pos < end and fmt[pos] in _DIGITS:
                precision, pos = _read_number(fmt, pos)
            elif pos < end and fmt[pos] == "*":
                precision_from_args = True
                pos += 1

        if pos < end:
            modifier = fmt[pos]
            if modifier == "l":
                flags |= Flags.LONG
                pos += 1
                if pos < end and fmt[pos] == "l":
                    flags |= Flags.LONG_LONG
                    pos += 1
            elif modifier == "h":
                flags |= Flags.SHORT
                pos += 1
                if pos < end and fmt[pos] == "h":
                    flags |= Flags.CHAR
                    pos += 1
            elif modifier in "tjz":
                flags |= Flags.LONG
                pos += 1

        if pos >= end:
            raise ValueError(f"incomplete conversion specification at index {start}")

        yield FormatSpec(
            specifier=fmt[pos],
            flags=flags,
            width=width,
            precision=precision,
            width_from_args=width_from_args,
            precision_from_args=precision_from_args,
        )
        pos += 1


def _take(args: Iterator[Any], spec: FormatSpec) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError(
            f"not enough arguments for %{spec.specifier} conversion"
        ) from None


def _take_int(args: Iterator[Any], spec: FormatSpec) -> int:
    value = _take(args, spec)
    if not isinstance(value, int):
        raise TypeError(
            f"%{spec.specifier} needs an integer, got {type(value).__name__}"
        )
    return value


def _integer_bits(flags: Flags) -> int:
    if flags & (Flags.LONG | Flags.LONG_LONG):
        return 64
    if flags & Flags.CHAR:
        return 8
    if flags & Flags.SHORT:
        return 16
    return 32


def _wrap(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _render_integer(
    spec: FormatSpec, flags: Flags, width: int, precision: int, arg: int
) -> str:
    kind = spec.specifier
    base = _INTEGER_BASES[kind]
    if base == 10:
        flags &= ~Flags.HASH
    if kind == "X":
        flags |= Flags.UPPERCASE
    if kind not in _SIGNED:
        flags &= ~(Flags.PLUS | Flags.SPACE)
    if flags & Flags.PRECISION:
        flags &= ~Flags.ZEROPAD

    bits = _integer_bits(flags)
    if kind in _SIGNED:
        value = _wrap(arg, bits, signed=True)
        return format_integer(abs(value), value < 0, base, precision, width, flags)
    value = _wrap(arg, bits, signed=False)
    return format_integer(value, False, base, precision, width, flags)


def _render_char(arg: Any, width: int, flags: Flags) -> str:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise TypeError(f"%c needs a single character, got {len(arg)}")
        char = arg
    elif isinstance(arg, int):
        char = chr(arg & 0xFF)
    else:
        raise TypeError(f"%c needs a character or integer, got {type(arg).__name__}")
    return char.ljust(width) if flags & Flags.LEFT else char.rjust(width)


def _render_string(arg: Any, width: int, precision: int, flags: Flags) -> str:
    if not isinstance(arg, str):
        raise TypeError(f"%s needs a string, got {type(arg).__name__}")
    text = arg.split("\0", 1)[0]
    if flags & Flags.PRECISION:
        text = text[:precision]
    return text.ljust(width) if flags & Flags.LEFT else text.rjust(width)


def _render_pointer(arg: Any, precision: int, flags: Flags) -> str:
    if arg is None:
        address = 0
    elif isinstance(arg, int):
        address = arg & ((1 << _POINTER_BITS) - 1)
    else:
        raise TypeError(f"%p needs an integer address, got {type(arg).__name__}")
    flags |= Flags.ZEROPAD | Flags.UPPERCASE
    return format_integer(address, False, 16, precision, _POINTER_WIDTH, flags)


def _render(spec: FormatSpec, args: Iterator[Any]) -> str:
    flags = spec.flags
    width = spec.width
    if spec.width_from_args:
        width = _take_int(args, spec)
        if width < 0:
            flags |= Flags.LEFT
            width = -width
    precision = spec.precision
    if spec.precision_from_args:
        precision = max(_take_int(args, spec), 0)

    kind = spec.specifier
    if kind in _INTEGER_BASES:
        return _render_integer(spec, flags, width, precision, _take_int(args, spec))
    if kind in "fF":
        value = _take(args, spec)
        if not isinstance(value, (int, float)):
            raise TypeError(f"%{kind} needs a number, got {type(value).__name__}")
        return format_float(value, precision, width, flags)
    if kind == "c":
        return _render_char(_take(args, spec), width, flags)
    if kind == "s":
        return _render_string(_take(args, spec), width, precision, flags)
    if kind == "p":
        return _render_pointer(_take(args, spec), precision, flags)
    # '%' and unknown conversion characters are written as they are
    return kind


def _format_sequence(fmt: str, args: Iterable[Any]) -> str:
    remaining = iter(args)
    return "".join(
        item if isinstance(item, str) else _render(item, remaining)
        for item in parse_format(fmt)
    )


def format(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with every conversion replaced by the formatted argument.

    Arguments left over after the last conversion are ignored.
    """
    return _format_sequence(fmt, args)


def sprintf(fmt: str, *args: Any) -> str:
    """Return the formatted text; the same as :func:`format`."""
    return _format_sequence(fmt, args)


def vsnprintf(count: int, fmt: str, args: Iterable[Any]) -> tuple[str, int]:
    """Format into a buffer of ``count`` characters including the terminator.

    Returns the text that fits (at most ``count - 1`` characters) and the
    length the full output would have.
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    text = _format_sequence(fmt, args)
    if len(text) < count:
        return text, len(text)
    return text[: max(count - 1, 0)], len(text)


def snprintf(count: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Like :func:`vsnprintf`, with the arguments given inline."""
    return vsnprintf(count, fmt, args)


def fctprintf(out: Callable[[str], Any], fmt: str, *args: Any) -> int:
    """Pass each output character to ``out`` and return the output length.

    NUL characters are counted but not passed on.
    """
    text = _format_sequence(fmt, args)
    for char in text:
        if char != "\0":
            out(char)
    return len(text)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output and return its length.

    NUL characters are counted but not written.
    """
    text = _format_sequence(fmt, args)
    sys.stdout.write(text.replace("\0", ""))
    return len(text)