import math

import pytest

from swollencandle import Error
from swollencandle.core import FieldType, TableReader, TableWriter
from swollencandle.core.writer import nearest_power_of_2


def _row(*values, types=None):
    writer = TableWriter()
    writer.format_row(*values, types=types)
    return writer.to_text()


def test_format_row_infers_types():
    assert _row(1, 'a', 1.5) == '1,"a",1.5\n'


def test_rows_are_appended():
    writer = TableWriter()
    writer.format_row('x', 'y')
    writer.format_row(1, 2)
    assert writer.to_text() == '"x","y"\n1,2\n'
    assert writer.to_bytes() == b'"x","y"\n1,2\n'


@pytest.mark.parametrize("value, text", [
    (1.0, '1'),
    (10.5, '10.5'),
    (-0.25, '-0.25'),
    (1e16, '1e+16'),
    (0.1, '0.1'),
    (-0.0, '-0'),
    (math.inf, 'inf'),
    (-math.inf, '-inf'),
    (math.nan, 'nan'),
])
def test_float64_is_shortest(value, text):
    assert _row(value) == text + '\n'


def test_float32_is_shortest():
    assert _row(0.1, types=[FieldType.float32]) == '0.1\n'
    assert _row(2.5, types=[FieldType.float32]) == '2.5\n'


def test_int_given_to_float_field():
    assert _row(3, types=[FieldType.float64]) == '3\n'


def test_strings_are_not_escaped():
    assert _row('a"b') == '"a"b"\n'


def test_big_unsigned():
    assert _row(2 ** 64 - 1) == '18446744073709551615\n'
    assert _row(2 ** 64 - 1, types=[FieldType.uint64]) == '18446744073709551615\n'


def test_out_of_range_integer():
    with pytest.raises(ValueError):
        _row(-1, types=[FieldType.uint32])
    with pytest.raises(ValueError):
        _row(2 ** 31, types=[FieldType.int32])
    with pytest.raises(ValueError):
        _row(2 ** 64)


def test_invalid_values():
    with pytest.raises(TypeError):
        _row(True)
    with pytest.raises(TypeError):
        _row(None)
    with pytest.raises(TypeError):
        _row(1.5, types=[FieldType.int64])
    with pytest.raises(TypeError):
        _row(1, types=[FieldType.string])
    with pytest.raises(ValueError):
        _row()
    with pytest.raises(ValueError):
        _row(1, 2, types=[FieldType.int64])


@pytest.mark.parametrize("n, expected", [(0, 2), (1, 2), (2, 2), (3, 4), (64, 64), (65, 128), (1000, 1024)])
def test_nearest_power_of_2(n, expected):
    assert nearest_power_of_2(n) == expected


def test_reserve():
    writer = TableWriter()
    writer.reserve(100)
    assert writer.capacity == 128
    assert writer.size == 0
    writer.reserve(10)
    assert writer.capacity == 128


def test_capacity_grows_by_powers_of_2():
    writer = TableWriter()
    writer.format_row(1)
    # int64 fields reserve 19 bytes
    assert writer.capacity == 32
    assert writer.size == len(writer) == 2
    assert writer.to_text() == '1\n'
    for _ in range(20):
        writer.format_row(12345)
    assert writer.size == 2 + 20 * 6
    assert writer.capacity == 256
    assert len(writer.to_bytes()) == writer.size


def test_clear():
    writer = TableWriter()
    writer.format_row('abc')
    writer.clear()
    writer.format_row(7)
    assert writer.to_text() == '7\n'


def test_round_trip_through_reader():
    types = [FieldType.int32, FieldType.uint32, FieldType.int64, FieldType.uint64,
             FieldType.float32, FieldType.float64, FieldType.string]
    values = (-2 ** 31, 2 ** 32 - 1, -2 ** 63, 2 ** 64 - 1, 1 / 3, 1 / 3, 'text, with comma')
    writer = TableWriter()
    writer.format_row(*values, types=types)
    parsed = TableReader.from_text(writer.to_bytes()).first_row().parse(*types)
    assert parsed[:4] == values[:4]
    assert parsed[4] == pytest.approx(1 / 3, rel=1e-7)
    assert parsed[5] == 1 / 3
    assert parsed[6] == 'text, with comma'


def test_float32_round_trip_is_exact():
    writer = TableWriter()
    for value in (1 / 3, 3.14159, 1e-20, 123456.789):
        writer.format_row(value, types=[FieldType.float32])
    reader = TableReader.from_text(writer.to_text())
    parsed = [row.parse(FieldType.float32)[0] for row in reader.all_rows()]
    rewritten = TableWriter()
    for value in parsed:
        rewritten.format_row(value, types=[FieldType.float32])
    assert rewritten.to_text() == writer.to_text()


def test_to_file(tmp_path):
    writer = TableWriter()
    writer.reserve(1024)
    writer.format_row(1, 'a')
    path = tmp_path / 'out.csv'
    assert writer.to_file(path).ok
    assert path.read_bytes() == b'1,"a"\n'


def test_to_file_failure(tmp_path):
    writer = TableWriter()
    writer.format_row(1)
    result = writer.to_file(tmp_path / 'missing' / 'out.csv')
    assert result.error is Error.io_failure
    assert isinstance(result.os_error, OSError)
