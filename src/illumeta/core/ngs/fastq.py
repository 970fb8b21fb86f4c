"""

FASTQ Core Module

========================================================================

Read and write records in FASTQ files, plain or compressed with gzip.

"""

import gzip
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Iterable, TextIO

from .. import path
from ..logs import logger
from ..write import need_write

FQ_NAME_MARK = "@"
FQ_PLUS_MARK = "+"
FQ_LINES_PER_READ = 4


class BadFastqRecordError(ValueError):
    """ A record in a FASTQ file is malformatted. """


class FastqRecord(object):
    """ One read in a FASTQ file. The header line holds the name and,
    after the first whitespace, the description. """
    __slots__ = ["name", "description", "seq", "qual"]

    def __init__(self, name: str, description: str, seq: str, qual: str):
        if len(seq) != len(qual):
            raise BadFastqRecordError(
                f"Read {repr(name)} has {len(seq)} bases but "
                f"{len(qual)} quality scores"
            )
        self.name = name
        self.description = description
        self.seq = seq
        self.qual = qual

    @classmethod
    def from_lines(cls, lines: list[str]):
        """ Make a record from the four lines of a FASTQ record. """
        if len(lines) != FQ_LINES_PER_READ:
            raise BadFastqRecordError(
                f"Expected {FQ_LINES_PER_READ} lines, but got {lines}"
            )
        header, seq, plus, qual = (line.rstrip("\r\n") for line in lines)
        if not header.startswith(FQ_NAME_MARK):
            raise BadFastqRecordError(f"Misformatted header {repr(header)}")
        if not plus.startswith(FQ_PLUS_MARK):
            raise BadFastqRecordError(f"Misformatted separator {repr(plus)}")
        fields = header[len(FQ_NAME_MARK):].split(maxsplit=1)
        if not fields:
            raise BadFastqRecordError(f"Blank read name in {repr(header)}")
        name = fields[0]
        description = fields[1].strip() if len(fields) > 1 else ""
        return cls(name, description, seq, qual)

    @property
    def header(self):
        if self.description:
            return f"{FQ_NAME_MARK}{self.name} {self.description}"
        return f"{FQ_NAME_MARK}{self.name}"

    def format(self):
        """ Format the record as four lines of a FASTQ file. """
        return f"{self.header}\n{self.seq}\n{FQ_PLUS_MARK}\n{self.qual}\n"

    def __eq__(self, other):
        if isinstance(other, FastqRecord):
            return all(getattr(self, attr) == getattr(other, attr)
                       for attr in self.__slots__)
        return NotImplemented

    def __repr__(self):
        return f"{type(self).__name__}({repr(self.header)})"


def open_fastq(fastq: Path, mode: str) -> TextIO:
    """ Open a FASTQ file in text mode, decompressing if needed. """
    if path.fastq_gz(fastq):
        return gzip.open(fastq, f"{mode}t")
    return open(fastq, mode)


def parse_fastq(fastq: str | Path):
    """ Yield every record in a FASTQ file. """
    fastq = path.sanitize(fastq, strict=True)
    logger.routine(f"Began parsing FASTQ file {fastq}")
    num_reads = 0
    with open_fastq(fastq, "r") as f:
        while True:
            lines = [line for line in (f.readline()
                                       for _ in range(FQ_LINES_PER_READ))
                     if line]
            if not lines:
                break
            if not any(line.strip() for line in lines):
                # Skip blank lines, such as those ending the file.
                continue
            try:
                record = FastqRecord.from_lines(lines)
            except BadFastqRecordError as error:
                raise BadFastqRecordError(
                    f"Read {num_reads + 1} in {fastq}: {error}"
                ) from None
            num_reads += 1
            yield record
    logger.detail(f"Parsed {num_reads} reads in FASTQ file {fastq}")
    logger.routine(f"Ended parsing FASTQ file {fastq}")


def write_fastq(fastq: str | Path,
                records: Iterable[FastqRecord],
                force: bool = False):
    """ Write records to a FASTQ file through a temporary file, so that
    the file appears only once it has been written completely. """
    fastq = path.sanitize(fastq, strict=False)
    path.check_fastq_ext(fastq)
    if not need_write(fastq, force):
        return 0
    fastq.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w",
                            dir=fastq.parent,
                            prefix=f".{fastq.name}",
                            suffix=path.fastq_ext(fastq),
                            delete=False) as f:
        tmp_fastq = Path(f.name)
    logger.action(f"Created temporary FASTQ file {tmp_fastq}")
    num_reads = 0
    try:
        with open_fastq(tmp_fastq, "w") as f:
            for record in records:
                f.write(record.format())
                num_reads += 1
        tmp_fastq.rename(fastq)
        logger.action(f"Released temporary FASTQ file {tmp_fastq} "
                      f"to {fastq}")
    finally:
        # The temporary file no longer exists if it was released.
        try:
            tmp_fastq.unlink()
        except FileNotFoundError:
            pass
    logger.routine(f"Wrote {num_reads} reads to FASTQ file {fastq}")
    return num_reads
