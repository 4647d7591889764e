"""Bit-level message protocol: one signal per bit, least significant bit first."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

_SPACE = " \t\n\v\f\r"
_DIGITS = re.compile(r"[0-9]*")
_BITS_PER_CHAR = 8


class InvalidPidError(ValueError):
    """Raised when a process id argument is not usable."""


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - (1 << 32) if n >= 1 << 31 else n


def atoi(text: str) -> int:
    """Parse a decimal integer, surrounded by optional whitespace.

    Returns 0 when anything other than whitespace or digits follows the number.
    """
    rest = text.lstrip(_SPACE)
    sign = -1 if rest.startswith("-") else 1
    if rest[:1] in ("+", "-"):
        rest = rest[1:]
    digits = _DIGITS.match(rest).group()
    rest = rest[len(digits):].lstrip(_SPACE)
    if rest and rest[0] not in "0123456789":
        return 0
    return _to_int32(int(digits or "0") * sign)


def parse_pid(text: str) -> int:
    """Turn a command-line argument into a process id."""
    pid = atoi(text)
    if pid in (0, -1):
        raise InvalidPidError(f"Invalid PID: {text!r}")
    return pid


def char_bits(byte: int) -> tuple[bool, ...]:
    """Return the 8 bits of ``byte``, least significant first."""
    if not -128 <= byte <= 255:
        raise ValueError(f"not a byte value: {byte}")
    byte &= 0xFF
    return tuple(bool((byte >> bit) & 1) for bit in range(_BITS_PER_CHAR))


def message_bits(message: str | bytes) -> Iterator[bool]:
    """Yield every bit of ``message`` followed by a terminating zero byte."""
    data = message.encode() if isinstance(message, str) else bytes(message)
    if b"\0" in data:
        raise ValueError("message must not contain a NUL byte")
    for byte in data + b"\0":
        yield from char_bits(byte)


@dataclass
class Decoder:
    """Reassembles bytes from incoming bits, one sender at a time.

    A bit from a new sender discards any partial byte. With
    ``announce_sender`` set, a newline is emitted whenever the sender changes.
    """

    announce_sender: bool = True
    _byte: int = field(default=0, init=False, repr=False)
    _bit: int = field(default=0, init=False, repr=False)
    _sender: int | None = field(default=None, init=False, repr=False)

    def _reset(self) -> None:
        self._byte = 0
        self._bit = 0

    def feed(self, sender: int, is_one: bool) -> tuple[bytes, bool]:
        """Take one bit; return the output to write and whether a message ended."""
        out = bytearray()
        if sender != self._sender:
            self._reset()
            self._sender = sender
            if self.announce_sender:
                out += b"\n"
        if is_one:
            self._byte |= 1 << self._bit
        self._bit += 1
        finished = False
        if self._bit == _BITS_PER_CHAR:
            if self._byte == 0:
                out += b"\n"
                finished = True
            else:
                out.append(self._byte)
            self._reset()
        return bytes(out), finished