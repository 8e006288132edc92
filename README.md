# tinyprintf

A compact printf-style formatter for Python. It behaves like a small embedded
`printf`, with the same flags, widths, precisions and length modifiers. It also
keeps that printf's quirks: round-half-to-even float rounding, a `%b` binary
conversion, fixed-point-only `%f`, and a limit of 32 converted characters per
number (padding spaces aside).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from tinyprintf.formatter import format, sprintf, snprintf, fctprintf

format("%05d|%-6s|%#x", 42, "ab", 255)
# '00042|ab    |0xff'

sprintf("%.2f", 3.14159)
# '3.14'

# snprintf keeps at most count - 1 characters and reports the full length
snprintf(8, "%s", "hello, world")
# ('hello, ', 12)

# send each character to a callable; the output length is returned
chars = []
fctprintf(chars.append, "%c%c", "h", "i")
# 2, and chars == ['h', 'i']
```

- `format(fmt, *args)` and `sprintf(fmt, *args)` return the formatted text.
  Arguments left over after the last conversion are ignored.
- `snprintf(count, fmt, *args)` and `vsnprintf(count, fmt, args)` return a
  pair: the text that fits in a buffer of `count` characters including the
  terminator, and the length the full output would have.
- `fctprintf(out, fmt, *args)` calls `out` with each character and returns the
  output length.
- `printf(fmt, *args)` writes to standard output and returns the output
  length.

NUL characters in the output are counted but not passed to `out` or written by
`printf`.

### Supported conversions

| Specifier | Meaning |
|-----------|---------|
| `d`, `i` | signed decimal |
| `u` | unsigned decimal |
| `x`, `X` | hexadecimal |
| `o` | octal |
| `b` | binary |
| `f`, `F` | fixed-point float (`nan` for NaN) |
| `c` | a one-character string, or an integer taken modulo 256 |
| `s` | string, cut at the first NUL character |
| `p` | 64-bit address, upper-case hexadecimal, zero-padded to 16 digits (`None` is 0) |
| `%` | literal percent |

Any other character after `%` is written as it is.

Flags `0 - + space #`, a width and a precision are accepted, and either can be
given as `*`; a negative `*` width left-aligns. Integer arguments are wrapped
to the width of the C type named by the length modifier: `int` (no modifier)
is 32 bits, `hh` is 8, `h` is 16, and `l`, `ll`, `j`, `z` and `t` are 64. So
`format("%u", -1)` gives `'4294967295'`.

### Errors

- A format string that ends inside a conversion raises `ValueError`.
- Too few arguments, or an argument of the wrong kind, raises `TypeError`.
- `%f` of a value whose magnitude is above 2147483647 raises `OverflowError`.
- A negative `count` for `snprintf` or `vsnprintf` raises `ValueError`.

## Lower-level pieces

- `tinyprintf.formatter.parse_format(fmt)` yields literal text runs and
  `FormatSpec` items (specifier, flags, width, precision, and whether width or
  precision come from the arguments).
- `tinyprintf.convert.format_integer(value, negative, base, precision, width,
  flags)` renders one magnitude in bases 2 to 36 with sign, prefix and padding.
- `tinyprintf.convert.format_float(value, precision, width, flags)` renders one
  float in fixed-point notation.
- `tinyprintf.convert.Flags` is the set of modifiers both functions take.

## What it does not do

There is no exponent (`%e`, `%g`) or hexadecimal float (`%a`) output, no
`%n`, and no positional arguments. Output goes to strings, callables or
standard output only; there is no character device or serial port.