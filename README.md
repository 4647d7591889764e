# sigtalk

Send a text message from one process to another using nothing but the two
user signals, `SIGUSR1` and `SIGUSR2`.

Each byte of the message is sent as eight signals, least significant bit
first: `SIGUSR1` stands for a 0 bit, `SIGUSR2` for a 1 bit. After every
signal the server answers with `SIGUSR1`, and the client waits for that
answer before sending the next bit. A zero byte ends the message; the
server then prints a newline. When a signal arrives from a process other
than the last sender, the server drops any partly received byte and starts
afresh.

A POSIX system is required. The server waits for signals with
`signal.sigwaitinfo`, so it runs only where Python provides that call
(Linux, for example; not macOS).

## Installing

```
pip install .
```

## Running

Start the server in one terminal. It prints its process id:

```
sigtalk-server
Server PID: 12345
```

From another terminal, send it a message:

```
sigtalk-client 12345 "hello there"
```

The client takes exactly two arguments, the server's process id and the
message. With any other number of arguments it prints
`Usage: ./client <PID> <message>` to standard error and exits with status 1.
A process id that does not parse as a number, or that is 0 or -1, is
rejected with `Invalid PID` and status 1. If the process cannot be
signalled at all, the client reports `Cannot signal <pid>: ...` and exits
with status 1.

### Receipts

Start the server with `--receipts` to have it confirm each complete message
to its sender with a `SIGUSR2`:

```
sigtalk-server --receipts
```

In this mode the server does not print a newline when a new sender starts
talking; it prints one only at the end of each message.

Give the client `--receipt` as its first argument to wait for that
confirmation; when it arrives the client prints `vu....... ✔️`:

```
sigtalk-client --receipt 12345 "hello there"
```

The server stops on Ctrl-C.

## Using it from Python

```python
from sigtalk.client import send_message

received = send_message(12345, "hello there", wait_for_receipt=False)
```

`send_message` accepts `str` or `bytes` and returns whether the server
confirmed the message (always `False` unless `wait_for_receipt=True`). A
message containing a NUL byte raises `ValueError`.

The receiving side is the `sigtalk.server.Server` class. Its `handle(signum,
sender)` method takes one bit signal, writes any decoded output to its
`output` stream, acknowledges the bit through `send_signal` (by default
`os.kill`) and returns whether a message ended; any signal other than
`SIGUSR1` or `SIGUSR2` raises `ValueError`. `serve_forever()` waits for
signals and hands each to `handle`.

```python
import io
import signal
from sigtalk.server import Server

sent = []
server = Server(output=io.BytesIO(), send_signal=lambda pid, sig: sent.append((pid, sig)))
server.handle(signal.SIGUSR2, 4242)
```

The bit-level protocol is available on its own in `sigtalk.protocol`:

```python
from sigtalk.protocol import Decoder, message_bits, parse_pid

decoder = Decoder()
for bit in message_bits("hi"):
    output, finished = decoder.feed(4242, bit)
```

`char_bits` gives the eight bits of one byte, least significant first.
`atoi` parses a decimal number the way the command line does, returning 0
when anything other than whitespace or digits follows it. `parse_pid`
raises `InvalidPidError` for the process ids the client refuses.

`sigtalk.printf` holds the small formatter the server uses for its output.
`format_text` returns the formatted string and `printf` writes it to
standard output and returns the number of characters written. It
understands `%c`, `%s`, `%p`, `%d`, `%i`, `%u`, `%x`, `%X` and `%%`;
unknown conversions produce nothing. The helpers `signed_decimal`,
`unsigned_decimal`, `hex_lower`, `hex_upper` and `address` render single
values:

```python
from sigtalk.printf import format_text

format_text("Server PID: %d\n", 12345)
```

## What it does not do

There is no timeout: if the server stops answering, the client waits for
the acknowledgement forever. Messages are not queued or stored; the server
only prints what it receives.

## Tests

```
pip install ".[test]"
pytest
```