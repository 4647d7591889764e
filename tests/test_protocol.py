import pytest

from sigtalk.protocol import (
    Decoder,
    InvalidPidError,
    atoi,
    char_bits,
    message_bits,
    parse_pid,
)


def _decode(decoder, sender, bits):
    output = bytearray()
    ends = []
    for bit in bits:
        chunk, finished = decoder.feed(sender, bit)
        output += chunk
        ends.append(finished)
    return bytes(output), ends


@pytest.mark.parametrize("n", [0, 1, 42, 4194304, -17, 2**31 - 1, -(2**31)])
def test_atoi_round_trip(n):
    assert atoi(str(n)) == n


def test_atoi_whitespace_and_plus():
    assert atoi(" \t\n+42\r\f ") == 42


def test_atoi_negative_with_spaces():
    assert atoi("  -123  ") == -123


@pytest.mark.parametrize("text", ["12abc", "abc", "1 x", "--5"])
def test_atoi_trailing_garbage_gives_zero(text):
    assert atoi(text) == 0


def test_atoi_stops_at_digits_after_space():
    assert atoi("12 34") == 12


@pytest.mark.parametrize("text", ["0", "-1", "abc", "", "99z"])
def test_parse_pid_rejects(text):
    with pytest.raises(InvalidPidError):
        parse_pid(text)


def test_invalid_pid_is_value_error():
    with pytest.raises(ValueError):
        parse_pid("0")


def test_parse_pid_accepts():
    assert parse_pid(" 4242 ") == 4242


@pytest.mark.parametrize("byte", [0, 1, 65, 128, 255])
def test_char_bits_round_trip(byte):
    bits = char_bits(byte)
    assert len(bits) == 8
    assert sum(1 << i for i, bit in enumerate(bits) if bit) == byte


def test_char_bits_least_significant_first():
    assert char_bits(1)[0] is True
    assert not any(char_bits(1)[1:])


def test_char_bits_signed_char():
    assert char_bits(-1) == char_bits(255)


def test_char_bits_out_of_range():
    with pytest.raises(ValueError):
        char_bits(256)


def test_message_bits_length_and_terminator():
    bits = list(message_bits("hello"))
    assert len(bits) == 8 * (len("hello") + 1)
    assert not any(bits[-8:])


def test_message_bits_rejects_nul():
    with pytest.raises(ValueError):
        list(message_bits(b"a\0b"))


@pytest.mark.parametrize("message", ["hi", "hello world", "héllo ✔"])
def test_round_trip_with_announce(message):
    output, ends = _decode(Decoder(), 100, message_bits(message))
    assert output == b"\n" + message.encode() + b"\n"
    assert ends[-1] is True
    assert not any(ends[:-1])


def test_round_trip_without_announce():
    output, ends = _decode(Decoder(announce_sender=False), 7, message_bits(b"abc"))
    assert output == b"abc\n"
    assert ends.count(True) == 1


def test_same_sender_announced_once():
    decoder = Decoder()
    first, _ = _decode(decoder, 5, message_bits("a"))
    second, _ = _decode(decoder, 5, message_bits("b"))
    assert first == b"\na\n"
    assert second == b"b\n"


def test_new_sender_discards_partial_byte():
    decoder = Decoder(announce_sender=False)
    partial, _ = _decode(decoder, 1, message_bits("x")[:0] if False else list(message_bits("x"))[:3])
    assert partial == b""
    output, ends = _decode(decoder, 2, message_bits("y"))
    assert output == b"y\n"
    assert ends[-1] is True


def test_new_sender_announces_newline():
    decoder = Decoder()
    _decode(decoder, 1, list(message_bits("x"))[:3])
    chunk, finished = decoder.feed(2, False)
    assert chunk == b"\n"
    assert finished is False