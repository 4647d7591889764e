"""Receive messages sent bit by bit as SIGUSR1/SIGUSR2 and print them."""

from __future__ import annotations

import argparse
import os
import signal
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import BinaryIO

from .printf import printf
from .protocol import Decoder

_SIGNALS = frozenset({signal.SIGUSR1, signal.SIGUSR2})


def _stdout_buffer() -> BinaryIO:
    return sys.stdout.buffer


@dataclass
class Server:
    """Decodes bits from senders and acknowledges each one.

    ``receipts`` makes the server send SIGUSR2 to the sender once a whole
    message has arrived; ``announce_sender`` writes a newline whenever a new
    sender starts talking.
    """

    output: BinaryIO = field(default_factory=_stdout_buffer)
    receipts: bool = False
    announce_sender: bool = True
    send_signal: Callable[[int, int], None] = os.kill
    _decoder: Decoder = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._decoder = Decoder(announce_sender=self.announce_sender)

    def handle(self, signum: int, sender: int) -> bool:
        """Process one bit signal from ``sender``; return whether a message ended."""
        if signum not in _SIGNALS:
            raise ValueError(f"unexpected signal: {signum}")
        out, finished = self._decoder.feed(sender, signum == signal.SIGUSR2)
        if out:
            self.output.write(out)
            self.output.flush()
        if finished and self.receipts:
            self.send_signal(sender, signal.SIGUSR2)
        self.send_signal(sender, signal.SIGUSR1)
        return finished

    def serve_forever(self) -> None:
        """Wait for bit signals and handle them until interrupted."""
        signal.pthread_sigmask(signal.SIG_BLOCK, _SIGNALS)
        try:
            while True:
                info = signal.sigwaitinfo(_SIGNALS)
                self.handle(info.si_signo, info.si_pid)
        finally:
            signal.pthread_sigmask(signal.SIG_UNBLOCK, _SIGNALS)


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: print the process id and serve messages."""
    parser = argparse.ArgumentParser(description="Receive messages sent as signals.")
    parser.add_argument(
        "--receipts",
        action="store_true",
        help="confirm each complete message to its sender",
    )
    args = parser.parse_args(argv)
    server = Server(receipts=args.receipts, announce_sender=not args.receipts)
    printf("Server PID: %d\n", os.getpid())
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())