"""Replay of a terminal session

This module replays a typescript on the terminal at the pace given by the
timing file and captures the terminal window at each chunk boundary
(`replay`). Each capture results in a Frame made of the path of the image
and of the delay associated with the chunk of output it displays.
"""
import codecs
import logging
import os
import sys
import time
from collections import namedtuple
from decimal import Decimal, ROUND_DOWN

from scriptgif.errors import UndecodableOutput

logger = logging.getLogger(__name__)

NANOSECONDS = 10 ** 9

Frame = namedtuple('Frame', ['image_path', 'delay'])


def decompose_delay(delay_text):
    """Return a delay in seconds as a tuple (seconds, nanoseconds)

    The decomposition is computed from the decimal representation of the
    delay so that no precision is lost to floating point arithmetic.
    """
    delay = Decimal(delay_text)
    if not delay.is_finite() or delay < 0:
        raise ValueError('Invalid delay: {}'.format(delay_text))
    seconds = int(delay)
    nanoseconds = int(((delay - seconds) * NANOSECONDS).to_integral_value(ROUND_DOWN))
    return seconds, nanoseconds


def pace(record, sleep=time.sleep):
    """Suspend execution for the delay of a timing record"""
    seconds, nanoseconds = decompose_delay(record.delay_text)
    sleep(seconds + nanoseconds / NANOSECONDS)


def frame_path(directory, index, extension):
    return os.path.join(directory, 'img-{}.{}'.format(index, extension))


def emit(chunk, decoder, terminal):
    """Write a chunk of output to the terminal

    Raise UndecodableOutput if the chunk is not valid UTF-8. A character
    split between two chunks is kept by the decoder and written with the
    next chunk."""
    try:
        text = decoder.decode(chunk)
    except UnicodeDecodeError as exc:
        raise UndecodableOutput('Typescript output is not valid UTF-8: {}'
                                .format(exc)) from exc
    terminal.write(text)
    terminal.flush()


def replay(records, reader, output_dir, capture, terminal=None, sleep=time.sleep):
    """Replay a typescript and yield a Frame for each chunk boundary

    The chunk of the first record is only buffered: it is written to the
    terminal together with the capture of the first frame, when the second
    record is processed. The chunk of the last record is read but never
    displayed. As a result, N records produce N-1 frames.

    :param records: Sequence of TimingRecord
    :param reader: ChunkReader positioned after the header of the typescript
    :param output_dir: Directory where images are captured
    :param capture: Object with an `extension` attribute and a
    `capture(image_path)` method which saves the content of the terminal
    window to `image_path`
    :param terminal: Text stream the output is written to (default: stdout)
    :param sleep: Function used to suspend execution (default: time.sleep)
    """
    if terminal is None:
        terminal = sys.stdout

    decoder = codecs.getincrementaldecoder('utf-8')('strict')
    frame_index = 1
    pending_chunk = None
    pending_record = None
    for record in records:
        if pending_record is not None:
            emit(pending_chunk, decoder, terminal)
            image_path = frame_path(output_dir, frame_index, capture.extension)
            capture.capture(image_path)
            logger.debug('Captured frame {} to {}'.format(frame_index, image_path))
            yield Frame(image_path, pending_record.delay_text)
            frame_index += 1

        pending_chunk = reader.read(record.byte_count)
        pending_record = record
        pace(record, sleep)

    reader.check_exhausted()
