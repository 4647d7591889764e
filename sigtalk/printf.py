"""Small printf-style formatter supporting %c %s %p %d %i %u %x %X and %%."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Any

_UINT_MASK = 0xFFFFFFFF
_ULONG_MASK = (1 << 64) - 1


def _to_int32(n: int) -> int:
    n &= _UINT_MASK
    return n - (1 << 32) if n >= 1 << 31 else n


def signed_decimal(n: int) -> str:
    """Render ``n`` as a signed 32-bit decimal."""
    return str(_to_int32(n))


def unsigned_decimal(nb: int) -> str:
    """Render ``nb`` as an unsigned 32-bit decimal."""
    return str(nb & _UINT_MASK)


def hex_lower(nb: int) -> str:
    """Render ``nb`` as unsigned 32-bit lower-case hexadecimal."""
    return format(nb & _UINT_MASK, "x")


def hex_upper(nb: int) -> str:
    """Render ``nb`` as unsigned 32-bit upper-case hexadecimal."""
    return format(nb & _UINT_MASK, "X")


def address(nb: int) -> str:
    """Render ``nb`` as a pointer: ``(nil)`` for zero, else ``0x`` and hex."""
    nb &= _ULONG_MASK
    if nb == 0:
        return "(nil)"
    return f"0x{nb:x}"


def _char(value: int | str) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c expects a single character")
        return value
    return chr(value & 0xFF)


def _string(value: Any) -> str:
    return "(null)" if value is None else str(value)


_CONVERSIONS: dict[str, Callable[[Any], str]] = {
    "c": _char,
    "s": _string,
    "p": address,
    "d": signed_decimal,
    "i": signed_decimal,
    "u": unsigned_decimal,
    "x": hex_lower,
    "X": hex_upper,
}


def _render(fmt: str, args: Iterable[Any]) -> Iterator[str]:
    pending = iter(args)
    chars = iter(fmt)
    for ch in chars:
        if ch != "%":
            yield ch
            continue
        spec = next(chars, None)
        if spec is None:
            return
        if spec == "%":
            yield "%"
            continue
        convert = _CONVERSIONS.get(spec)
        if convert is None:
            # Unknown conversions produce no output and consume no argument.
            continue
        try:
            value = next(pending)
        except StopIteration:
            raise TypeError(f"missing argument for %{spec}") from None
        yield convert(value)


def format_text(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text."""
    if fmt is None:
        raise TypeError("format must not be None")
    return "".join(_render(fmt, args))


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output; return its length."""
    text = format_text(fmt, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text)