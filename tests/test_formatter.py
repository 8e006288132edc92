import pytest
from hypothesis import given
from hypothesis import strategies as st

from tinyprintf import formatter as tp
from tinyprintf.convert import Flags
from tinyprintf.formatter import FormatSpec, parse_format

INT32 = st.integers(-(2**31), 2**31 - 1)
POSITIVE_UINT32 = st.integers(1, 2**32 - 1)
TEXT = st.text(max_size=20).map(lambda s: s.replace("\0", ""))


@pytest.mark.parametrize(
    "fmt",
    ["%u", "%x", "%X", "%o", "%10x", "%-10X|", "%08o", "%.6x", "%#x", "%#X",
     "%#10x"],
)
@given(value=POSITIVE_UINT32)
def test_unsigned_matches_builtin(fmt, value):
    assert tp.format(fmt, value) == fmt % value


@given(value=st.integers(-(2**63), 2**63 - 1))
def test_long_long_matches_builtin(value):
    assert tp.format("%lld", value) == "%d" % value
    assert tp.format("%ld", value) == "%d" % value


@given(value=st.integers(0, 2**32 - 1))
def test_binary(value):
    assert tp.format("%b", value) == f"{value:b}"


def test_int_wraps_to_32_bits():
    assert tp.format("%d", 2**31) == str(2**31 - 2**32)
    assert tp.format("%u", -1) == str(2**32 - 1)
    assert tp.format("%lu", -1) == str(2**64 - 1)


def test_short_and_char_modifiers():
    assert tp.format("%hhd", 255) == "-1"
    assert tp.format("%hu", 65537) == tp.format("%u", 1)
    assert tp.format("%hhx", 0x1AB) == tp.format("%x", 0xAB)


def test_hash_octal_and_zero():
    assert tp.format("%#o", 8) == "010"
    assert tp.format("%#x", 0) == tp.format("%x", 0)


def test_zero_with_zero_precision_is_empty():
    assert tp.format("%.0d", 0) == ""


@pytest.mark.parametrize(
    "fmt",
    ["%.1f", "%.2f", "%.3f", "%.4f", "%10.3f", "%-10.2f|", "%+.2f", "% .3f",
     "%010.2f", "%f", "%.12f"],
)
@given(numerator=st.integers(-(2**20), 2**20))
def test_float_matches_builtin(fmt, numerator):
    value = numerator / 16
    assert tp.format(fmt, value) == fmt % value


def test_float_accepts_int():
    assert tp.format("%.2f", 3) == tp.format("%.2f", 3.0)


def test_float_nan_is_unpadded():
    assert tp.format("%f", float("nan")) == "nan"
    assert tp.format("%10f", float("nan")) == "nan"


def test_float_too_large():
    with pytest.raises(OverflowError):
        tp.format("%f", 1e10)
    with pytest.raises(OverflowError):
        tp.format("%f", float("-inf"))


@pytest.mark.parametrize("fmt", ["%s", "%10s", "%-10s|", "%.3s", "%10.3s", "%-8.2s|"])
@given(text=TEXT)
def test_string_matches_builtin(fmt, text):
    assert tp.format(fmt, text) == fmt % text


def test_string_stops_at_nul():
    assert tp.format("%s", "ab\0cd") == tp.format("%s", "ab")


@pytest.mark.parametrize("fmt", ["%c", "%5c", "%-5c|"])
def test_char_matches_builtin(fmt):
    assert tp.format(fmt, "A") == fmt % "A"


def test_char_from_int_wraps():
    assert tp.format("%c", 65 + 256) == tp.format("%c", "A")
    assert tp.format("%c", 0) == "\0"


@given(address=st.integers(0, 2**64 - 1))
def test_pointer_is_sixteen_uppercase_hex_digits(address):
    assert tp.format("%p", address) == f"{address:016X}"


def test_null_pointer():
    assert tp.format("%p", None) == tp.format("%p", 0)
    assert tp.format("%p", None) == "0" * 16


@given(width=st.integers(-20, 20), value=INT32)
def test_star_width_matches_builtin(width, value):
    assert tp.format("%*d", width, value) == "%*d" % (width, value)


def test_star_precision():
    assert tp.format("%.*s", 2, "hello") == "%.*s" % (2, "hello")
    assert tp.format("%.*d", -3, 7) == tp.format("%.0d", 7)


def test_percent_and_unknown_specifiers():
    assert tp.format("100%%") == "100%"
    assert tp.format("%y") == "y"
    assert tp.format("%5q") == "q"
    assert tp.format("%*%%d", 5, 9) == tp.format("%%%d", 9)


def test_extra_arguments_are_ignored():
    assert tp.format("%d", 1, 2) == tp.format("%d", 1)


@pytest.mark.parametrize(
    ("fmt", "args"),
    [("%d", ()), ("%*d", (3,)), ("%d", ("x",)), ("%s", (5,)), ("%f", ("x",)),
     ("%c", ("ab",)), ("%p", (1.5,))],
)
def test_bad_arguments(fmt, args):
    with pytest.raises(TypeError):
        tp.format(fmt, *args)


@pytest.mark.parametrize("fmt", ["abc%", "%-5", "%.3l", "%hh"])
def test_incomplete_specification(fmt):
    with pytest.raises(ValueError):
        tp.format(fmt, 1)


@given(text=TEXT)
def test_sprintf_equals_format(text):
    assert tp.sprintf("<%s>", text) == tp.format("<%s>", text)


@given(text=TEXT, count=st.integers(0, 40))
def test_snprintf_truncates(text, count):
    stored, length = tp.snprintf(count, "[%s]", text)
    full = tp.format("[%s]", text)
    assert length == len(full)
    assert full.startswith(stored)
    if len(full) < count:
        assert stored == full
    else:
        assert len(stored) == max(count - 1, 0)


def test_vsnprintf_matches_snprintf():
    assert tp.vsnprintf(6, "%d-%s", [123, "abc"]) == tp.snprintf(6, "%d-%s", 123, "abc")


def test_snprintf_negative_count():
    with pytest.raises(ValueError):
        tp.snprintf(-1, "%d", 1)


def test_fctprintf_skips_nul_but_counts_it():
    collected = []
    count = tp.fctprintf(collected.append, "a%cb%d", 0, 42)
    full = tp.format("a%cb%d", 0, 42)
    assert count == len(full)
    assert "".join(collected) == full.replace("\0", "")
    assert len(collected) == count - 1


def test_printf_writes_stdout(capsys):
    count = tp.printf("%s-%5d\n", "x", 3)
    out = capsys.readouterr().out
    assert out == tp.format("%s-%5d\n", "x", 3)
    assert count == len(out)


def test_parse_format_literals_and_spec():
    items = list(parse_format("x%-5.2ld y"))
    assert items[0] == "x"
    assert items[2] == " y"
    assert items[1] == FormatSpec(
        "d", Flags.LEFT | Flags.PRECISION | Flags.LONG, 5, 2
    )


def test_parse_format_star_and_modifiers():
    (spec,) = parse_format("%*.*hhu")
    assert spec.width_from_args and spec.precision_from_args
    assert spec.flags == Flags.PRECISION | Flags.SHORT | Flags.CHAR
    assert spec.specifier == "u"


def test_parse_format_plain_and_percent():
    assert list(parse_format("plain")) == ["plain"]
    assert list(parse_format("%%")) == [FormatSpec("%")]
    assert list(parse_format("")) == []