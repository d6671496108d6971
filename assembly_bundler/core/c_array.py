"""Serialize a byte stream as the body of a C array initializer.

WHY: The bundle embeds assemblies that can be several megabytes. Reading
in fixed chunks keeps memory flat, and one line per chunk keeps the
generated file diff-friendly.

HOW: Read BYTES_PER_LINE bytes at a time and write each chunk as one
tab-indented line of "0xXX," values.

RULES:
- Uppercase two-digit hex, every value followed by a comma
- At most BYTES_PER_LINE values per line; only the last line may be short
- Empty input writes nothing
"""

from __future__ import annotations

from functools import partial
from typing import BinaryIO, TextIO

from assembly_bundler.config import BYTES_PER_LINE


def format_line(chunk: bytes) -> str:
    return "\t" + "".join("0x{:02X},".format(b) for b in chunk)


def write_c_array(source: BinaryIO, out: TextIO, per_line: int = BYTES_PER_LINE) -> int:
    """Copy every byte of ``source`` into ``out`` as array lines.

    Returns:
        The number of bytes written.
    """
    total = 0
    for chunk in iter(partial(source.read, per_line), b""):
        # Short reads mid-stream (pipes) are folded into full lines
        while len(chunk) < per_line:
            more = source.read(per_line - len(chunk))
            if not more:
                break
            chunk += more
        out.write(format_line(chunk))
        out.write("\n")
        total += len(chunk)
    return total
