import io
import unittest

from scriptgif.errors import MalformedTimingLine, ScriptLengthMismatch, TruncatedScript
from scriptgif.typescript import ChunkReader, TimingRecord, read_timing_records


class OneByteStream(io.RawIOBase):
    """Binary stream returning at most one byte per read, like a slow pipe"""
    def __init__(self, data):
        self.data = data
        self.position = 0

    def readable(self):
        return True

    def readinto(self, buffer):
        if self.position >= len(self.data) or len(buffer) == 0:
            return 0
        buffer[0] = self.data[self.position]
        self.position += 1
        return 1


class TestTimingRecord(unittest.TestCase):
    def test_from_line(self):
        test_cases = [
            ('0.5 3', TimingRecord(0.5, 3, '0.5')),
            ('0.5 3\n', TimingRecord(0.5, 3, '0.5')),
            ('0.5 3\r\n', TimingRecord(0.5, 3, '0.5')),
            ('1.0 0', TimingRecord(1.0, 0, '1.0')),
            ('2 4096', TimingRecord(2.0, 4096, '2')),
            ('0.000123 1', TimingRecord(0.000123, 1, '0.000123')),
        ]
        for line, record in test_cases:
            with self.subTest(case=line):
                self.assertEqual(TimingRecord.from_line(line), record)

    def test_from_line_keeps_delay_text(self):
        record = TimingRecord.from_line('1.500000 12')
        self.assertEqual(record.delay_text, '1.500000')
        self.assertEqual(record.delay, 1.5)

    def test_from_line_idempotent(self):
        line = '0.253781 17\n'
        self.assertEqual(TimingRecord.from_line(line), TimingRecord.from_line(line))

    def test_from_line_failure(self):
        failure_test_cases = [
            ('empty line', ''),
            ('single token', '1.0'),
            ('three tokens', '1.0 3 4'),
            ('double space', '1.0  3'),
            ('tab separator', '1.0\t3'),
            ('leading space', ' 1.0 3'),
            ('negative delay', '-1.0 3'),
            ('non numeric delay', 'a 3'),
            ('not a number delay', 'nan 3'),
            ('infinite delay', 'inf 3'),
            ('exponent delay', '1e3 3'),
            ('trailing dot delay', '1. 3'),
            ('negative size', '1.0 -3'),
            ('decimal size', '1.0 3.5'),
            ('signed size', '1.0 +3'),
            ('non ASCII size', '1.0 ³'),
            ('empty size', '1.0 '),
        ]
        for case, line in failure_test_cases:
            with self.subTest(case=case):
                with self.assertRaises(MalformedTimingLine):
                    TimingRecord.from_line(line)

    def test_read_timing_records(self):
        timing_file = io.StringIO('0.5 3\n1.0 4\n')
        self.assertEqual(read_timing_records(timing_file), [
            TimingRecord(0.5, 3, '0.5'),
            TimingRecord(1.0, 4, '1.0'),
        ])

        with self.subTest(case='empty file'):
            self.assertEqual(read_timing_records(io.StringIO('')), [])

        with self.subTest(case='invalid line'):
            timing_file = io.StringIO('0.5 3\n1.0 4\n2.0 1 1\n')
            with self.assertRaisesRegex(MalformedTimingLine, 'Line 3'):
                read_timing_records(timing_file)


class TestChunkReader(unittest.TestCase):
    def test_read(self):
        reader = ChunkReader(io.BytesIO(b'abcwxyz'))
        self.assertEqual(bytes(reader.read(3)), b'abc')
        self.assertEqual(bytes(reader.read(4)), b'wxyz')
        self.assertEqual(reader.bytes_read, 7)
        reader.check_exhausted()

    def test_read_resizes_buffer(self):
        reader = ChunkReader(io.BytesIO(b'abcdefghijk'))
        sizes = [5, 2, 4, 0]
        expected = [b'abcde', b'fg', b'hijk', b'']
        for size, data in zip(sizes, expected):
            with self.subTest(case=size):
                chunk = reader.read(size)
                self.assertEqual(len(chunk), size)
                self.assertEqual(bytes(chunk), data)

    def test_read_releases_previous_chunk(self):
        reader = ChunkReader(io.BytesIO(b'abcde'))
        chunk = reader.read(3)
        reader.read(2)
        with self.assertRaises(ValueError):
            bytes(chunk)

    def test_read_short_reads(self):
        reader = ChunkReader(OneByteStream(b'abcwxyz'))
        self.assertEqual(bytes(reader.read(3)), b'abc')
        self.assertEqual(bytes(reader.read(4)), b'wxyz')

    def test_read_truncated(self):
        test_cases = [
            ('empty stream', b'', 1),
            ('short stream', b'abc', 4),
            ('slow short stream', OneByteStream(b'abc'), 4),
        ]
        for case, data, size in test_cases:
            with self.subTest(case=case):
                stream = io.BytesIO(data) if isinstance(data, bytes) else data
                reader = ChunkReader(stream)
                with self.assertRaises(TruncatedScript):
                    reader.read(size)

    def test_truncated_is_length_mismatch(self):
        reader = ChunkReader(io.BytesIO(b'ab'))
        with self.assertRaises(ScriptLengthMismatch):
            reader.read(3)

    def test_skip_header(self):
        stream = io.BytesIO(b'Script started on Sat 17 Oct 2026 10:00:00 AM CEST\nabc')
        reader = ChunkReader(stream)
        reader.skip_header()
        self.assertEqual(bytes(reader.read(3)), b'abc')

    def test_check_exhausted(self):
        test_cases = [
            ('no data', b''),
            ('legacy footer', b'\nScript done on Sat 17 Oct 2026 10:00:00 AM CEST\n'),
            ('util-linux footer',
             b'\nScript done on 2026-10-17 10:00:00+02:00 [COMMAND_EXIT_CODE="0"]\n'),
        ]
        for case, data in test_cases:
            with self.subTest(case=case):
                reader = ChunkReader(io.BytesIO(b'abc' + data))
                reader.read(3)
                reader.check_exhausted()

    def test_check_exhausted_failure(self):
        test_cases = [
            ('extra output', b'def'),
            ('extra output before footer', b'def\nScript done on Sat 17 Oct 2026\n'),
        ]
        for case, data in test_cases:
            with self.subTest(case=case):
                reader = ChunkReader(io.BytesIO(b'abc' + data))
                reader.read(3)
                with self.assertRaises(ScriptLengthMismatch):
                    reader.check_exhausted()
