import math

from swollencandle.core import FieldType, TableReader

I32, U32, I64, U64 = FieldType.int32, FieldType.uint32, FieldType.int64, FieldType.uint64
F32, F64, STR = FieldType.float32, FieldType.float64, FieldType.string


def _parse(text, *types):
    return TableReader.from_text(text).first_row().parse(*types)


def test_parse_mixed_fields():
    assert _parse('-12,34,"abc",1.5\n', I32, U32, STR, F64) == (-12, 34, 'abc', 1.5)


def test_parse_without_trailing_newline():
    assert _parse('1,2', I64, I64) == (1, 2)


def test_whitespace_before_fields_is_skipped():
    assert _parse(' \t1, \t2\t\r\n', I64, I64) == (1, 2)


def test_field_count_must_match():
    assert _parse('1,2,3\n', I64, I64) is None
    assert _parse('1,2\n', I64, I64, I64) is None


def test_empty_field_fails():
    assert _parse('1,,3\n', I64, I64, I64) is None
    assert _parse('\n', I64) is None


def test_quoted_escaped_quote():
    assert _parse('"a""b"\n', STR) == ('a"b',)
    assert _parse('"""x"""', STR) == ('"x"',)


def test_quoted_field_keeps_delimiters():
    assert _parse('"a,b\tc",1\n', STR, I32) == ('a,b\tc', 1)


def test_unterminated_quote_fails():
    assert _parse('"abc\n', STR) is None
    assert _parse('"abc', STR) is None
    assert _parse('"abc""', STR) is None


def test_bare_string_is_raw():
    assert _parse('hello world,x\n', STR, STR) == ('hello world', 'x')


def test_quoted_number():
    assert _parse('"42","1.25"\n', I32, F64) == (42, 1.25)


def test_integers_are_strict():
    assert _parse('+1', I32) is None
    assert _parse('1_000', I32) is None
    assert _parse('1,000', I32) is None
    assert _parse('12abc', I32) is None
    assert _parse('1.0', I64) is None
    assert _parse('-1', U32) is None
    assert _parse('-1', I32) == (-1,)


def test_integer_bounds():
    assert _parse('2147483647', I32) == (2147483647,)
    assert _parse('2147483648', I32) is None
    assert _parse('-2147483648', I32) == (-2147483648,)
    assert _parse('4294967295', U32) == (4294967295,)
    assert _parse('4294967296', U32) is None
    assert _parse('9223372036854775808', I64) is None
    assert _parse('18446744073709551615', U64) == (18446744073709551615,)
    assert _parse('18446744073709551616', U64) is None


def test_floats():
    assert _parse('1e3,.5,-2.,3E-2', F64, F64, F64, F64) == (1000.0, 0.5, -2.0, 0.03)
    assert _parse('+1.5', F64) is None
    assert _parse('1.5x', F64) is None
    assert _parse('0x10', F64) is None
    assert _parse('1e999', F64) is None
    assert _parse('inf', F64) == (math.inf,)
    assert _parse('-Infinity', F64) == (-math.inf,)
    assert math.isnan(_parse('nan', F64)[0])


def test_float32_rounding():
    value, = _parse('0.1', F32)
    assert value != 0.1
    assert abs(value - 0.1) < 1e-8
    assert _parse('1e39', F32) is None


def test_invalid_utf8_string_fails():
    assert _parse(b'"\xff\xfe"', STR) is None


def test_extra_text_after_last_field_fails():
    assert _parse('1 2\n', I64) is None
    assert _parse('"a"b\n', STR) is None


def test_fields():
    row = TableReader.from_text('a, "b""c" ,3\n4').first_row()
    assert row.fields() == ['a', 'b"c', '3']
