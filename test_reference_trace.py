import pytest

from reference_trace import (Reference, decode_record, hex_digits, offset_bits,
                             page_num_bits, read_trace)


def test_digit_widths():
    assert offset_bits(4096) == 12
    assert page_num_bits(4096) == 20
    assert hex_digits(12) == 3
    assert hex_digits(20) == 5
    assert hex_digits(10) == 3


@pytest.mark.parametrize('record, expected', [
    ('0041f7a0 R', Reference(0x0041f, 0x7a0, 'R')),
    ('13f5e2c0 W', Reference(0x13f5e, 0x2c0, 'W')),
    ('ffffffff R', Reference(0xfffff, 0xfff, 'R')),
    ('00000000 R', Reference(0, 0, 'R')),
])
def test_decode_record(record, expected):
    assert decode_record(record) == expected


def test_decode_keeps_unknown_action():
    assert decode_record('00001000 X').action == 'X'


def test_decode_smaller_frames():
    # 1 KiB frames: 22 page bits in 6 digits, 10 offset bits in 3 digits
    assert decode_record('00000a3ff W', frame_size=1024) == Reference(0xa, 0x3ff, 'W')


def test_read_trace(tmp_path):
    trace = tmp_path / 'test.trace'
    trace.write_text("0041f7a0 R\n\n13f5e2c0 W\r\n")

    assert list(read_trace(str(trace))) == [Reference(0x0041f, 0x7a0, 'R'),
                                            Reference(0x13f5e, 0x2c0, 'W')]
