"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Sequence I/O - Streaming FASTA Reader                                        │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Reads (multi-)FASTA files one record at a time so only the current record
    is held in memory.  Plain and gzip/bgzip-compressed files are supported.

    Record names are the first whitespace-delimited token of the header line,
    matching the chromosome names genome browsers expect in track files.
"""

# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
import gzip
import io
import logging
from typing import IO, Iterable, Iterator, Tuple, Union

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'


def open_compressed_file(file_path_or_object: Union[str, IO]) -> IO:
    """
    Open a file that may be compressed (gzip, bgzip) or uncompressed.

    Detects compression by file extension for paths and by magic bytes for
    file objects.

    Args:
        file_path_or_object: File path string or file-like object

    Returns:
        Text-mode file-like object ready for reading

    Example:
        >>> with open_compressed_file('genome.fa.gz') as f:
        ...     records = list(parse_fasta_streaming(f))
    """
    if isinstance(file_path_or_object, str):
        if file_path_or_object.endswith(('.gz', '.bgz')):
            return gzip.open(file_path_or_object, 'rt', encoding='utf-8')
        return open(file_path_or_object, 'r', encoding='utf-8')

    file_object = file_path_or_object
    if isinstance(file_object, io.TextIOBase):
        return file_object

    file_object.seek(0)
    magic = file_object.read(2)
    file_object.seek(0)

    if magic == GZIP_MAGIC:
        return gzip.open(file_object, 'rt', encoding='utf-8')
    return io.TextIOWrapper(file_object, encoding='utf-8')


def parse_fasta_streaming(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """
    Yield ``(name, sequence)`` for each FASTA record.

    Sequences are uppercased with all whitespace removed; characters are
    otherwise passed through untouched (N-runs are split out downstream and
    any other non-ACGT symbol is rejected there).  Records without a header
    name are called ``sequence_<n>``.  Sequence lines before the first header
    are ignored.

    Args:
        lines: Text lines, e.g. an open file handle

    Yields:
        Tuple of (sequence_name, sequence_string)
    """
    current_name = None
    current_seq = []
    sequence_counter = 0

    for line in lines:
        line = line.strip()
        if not line:
            continue

        if line.startswith('>'):
            if current_name is not None:
                yield current_name, ''.join(current_seq)
                current_seq = []

            sequence_counter += 1
            fields = line[1:].split()
            current_name = fields[0] if fields else f"sequence_{sequence_counter}"
        elif current_name is None:
            logger.warning("Ignoring sequence data before the first FASTA header")
        else:
            current_seq.append(''.join(line.split()).upper())

    if current_name is not None:
        yield current_name, ''.join(current_seq)


def read_fasta_records(file_path_or_object: Union[str, IO]) -> Iterator[Tuple[str, str]]:
    """
    Stream records from a FASTA file with automatic compression detection.

    Example:
        >>> for name, seq in read_fasta_records('genome.fa.gz'):
        ...     print(f"{name}: {len(seq)} bp")
    """
    with open_compressed_file(file_path_or_object) as handle:
        yield from parse_fasta_streaming(handle)
