"""Typescript and timing files

This module reads the two files written by `script --timing`:
    - the timing file, made of one record per line with the format
    "<delay in seconds> <size in bytes>"
    - the typescript, made of a header line followed by the raw output of the
    session. The typescript has no delimiter of its own: the boundaries of
    each chunk of output are given by the sizes listed in the timing file.
"""
import re
from collections import namedtuple

from scriptgif.errors import MalformedTimingLine, ScriptLengthMismatch, TruncatedScript

_DELAY_RE = re.compile(r'[0-9]+(\.[0-9]+)?')
_FOOTER_PREFIX = b'Script done'

_TimingRecord = namedtuple('_TimingRecord', ['delay', 'byte_count', 'delay_text'])


class TimingRecord(_TimingRecord):
    """Record of the timing file

    delay: Time elapsed since the previous chunk of output, in seconds
    byte_count: Size of the chunk of output in the typescript
    delay_text: Delay as written in the timing file
    """
    @classmethod
    def from_line(cls, line):
        """Raise MalformedTimingLine if line is not a valid timing record"""
        line = line.rstrip('\r\n')
        parts = line.split(' ')
        if len(parts) != 2:
            raise MalformedTimingLine('Expected "<delay> <size>", got "{}"'.format(line))

        delay_text, size_text = parts
        if _DELAY_RE.fullmatch(delay_text) is None:
            raise MalformedTimingLine('Invalid delay: "{}"'.format(delay_text))
        # str.isdigit also accepts non ASCII digits such as superscripts
        if not (size_text.isascii() and size_text.isdigit()):
            raise MalformedTimingLine('Invalid size: "{}"'.format(size_text))

        return cls(float(delay_text), int(size_text), delay_text)


def read_timing_records(timing_file):
    """Return the list of the records of an opened timing file

    The whole file is parsed at once so that an invalid line is reported
    before the replay of the session starts.
    Raise MalformedTimingLine if a line is invalid"""
    records = []
    for line_number, line in enumerate(timing_file, start=1):
        try:
            records.append(TimingRecord.from_line(line))
        except MalformedTimingLine as exc:
            raise MalformedTimingLine('Line {} of timing file: {}'
                                      .format(line_number, exc)) from exc
    return records


class ChunkReader:
    """Read chunks of output from a typescript opened in binary mode

    A single buffer is reused for all chunks. It is resized to the size of
    the chunk before each read, and the memoryview returned by the previous
    call to `read` is released at that point: the content of a chunk must be
    used before reading the next one.
    """
    def __init__(self, script_file):
        self.script_file = script_file
        self.bytes_read = 0
        self._buffer = bytearray()
        self._view = None

    def skip_header(self):
        """Discard the first line of the typescript (start date of the session)"""
        self.script_file.readline()

    def read(self, size):
        """Return a memoryview of the next `size` bytes of the typescript

        Raise TruncatedScript if the typescript ends before `size` bytes are read"""
        if self._view is not None:
            self._view.release()
            self._view = None
        self._resize(size)

        view = memoryview(self._buffer)
        filled = 0
        while filled < size:
            with view[filled:] as window:
                count = self.script_file.readinto(window)
            if not count:
                view.release()
                raise TruncatedScript('Typescript ended after {} bytes while {} more bytes '
                                      'were expected'.format(self.bytes_read + filled,
                                                             size - filled))
            filled += count

        self.bytes_read += size
        self._view = view
        return view

    def _resize(self, size):
        if size < len(self._buffer):
            del self._buffer[size:]
        else:
            self._buffer.extend(bytes(size - len(self._buffer)))

    def check_exhausted(self):
        """Raise ScriptLengthMismatch if data remains after the last chunk

        The footer line written by util-linux `script` at the end of the
        session is not listed in the timing file and is ignored."""
        remaining = self.script_file.read()
        if not remaining:
            return
        footer = remaining.strip(b'\r\n')
        if footer.startswith(_FOOTER_PREFIX) and b'\n' not in footer:
            return
        raise ScriptLengthMismatch('Typescript has {} more bytes than declared in the '
                                   'timing file ({} bytes)'.format(len(remaining),
                                                                   self.bytes_read))
