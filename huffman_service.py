# filename: huffman_service.py

import itertools
import os
import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Optional, Tuple

from huffman_core import DEFAULT_CHUNK_SIZE, HuffmanLogic

SUCCESS_MESSAGE = "Encoding Successful"
FAILURE_MESSAGE = "Something went wrong, refer to error message above"
MISSING_CHARS_MESSAGE = (
    "Your input file contained some characters the encoding file did not "
    "so these characters were not included in the output encoding"
)


class HuffmanEncodingError(Exception):
    """Base class for failures that stop the encoding pipeline."""


class OutputNotEmptyError(HuffmanEncodingError):
    def __init__(self, path):
        super().__init__(
            "The file you entered as the output file is not empty. "
            "Please specify an empty file or the name of a new file"
        )
        self.path = path


class EmptyAlphabetError(HuffmanEncodingError):
    def __init__(self, path):
        super().__init__(f"The encoding file {path} contains no characters to build a Huffman code from")
        self.path = path


class EncodingStatus(Enum):
    OK = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class EncodingStats:
    input_bits: int = 0
    output_bits: int = 0
    missing: FrozenSet[str] = frozenset()

    @property
    def savings(self) -> int:
        return self.input_bits - self.output_bits

    @property
    def complete(self) -> bool:
        return not self.missing


@dataclass
class EncodingResult:
    status: EncodingStatus
    message: str
    codes: Dict[str, str] = field(default_factory=dict)
    leaves: List[Tuple[str, int, str]] = field(default_factory=list)
    stats: Optional[EncodingStats] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is not EncodingStatus.ERROR


class HuffmanService:
    def __init__(self, encoding="utf-8", chunk_size=DEFAULT_CHUNK_SIZE, out=None):
        self.logic = HuffmanLogic()
        self.encoding = encoding
        self.chunk_size = chunk_size
        self.out = out if out is not None else sys.stdout

    def _report(self, *lines):
        for line in lines:
            print(line, file=self.out)

    def _open_text(self, path, mode="r"):
        # newline="" keeps "\r\n" as the two characters it is on disk
        return open(path, mode, encoding=self.encoding, newline="")

    def build_codes(self, reference_path):
        """
        Derive the code table from the character frequencies of reference_path.

        Returns (root, codes). Raises EmptyAlphabetError when the file holds
        no characters and OSError when it cannot be read.
        """
        with self._open_text(reference_path) as reader:
            freqs = self.logic.count_frequencies(reader, chunk_size=self.chunk_size)
        tree = self.logic.build_tree(self.logic.sorted_leaves(freqs))
        if tree is None:
            raise EmptyAlphabetError(reference_path)
        codes = self.logic.generate_codes(tree)
        return tree, codes

    def encode_stream(self, reader, writer, codes, head=""):
        """
        Write the code of every character of reader to writer, in order.

        head holds text already read from reader; it is encoded first.
        """
        input_chars = 0
        output_bits = 0
        missing = set()
        chunks = iter(lambda: reader.read(self.chunk_size), "")
        if head:
            chunks = itertools.chain([head], chunks)
        for chunk in chunks:
            input_chars += len(chunk)
            encoded = []
            for char in chunk:
                code = codes.get(char)
                if code is None:
                    missing.add(char)
                    continue
                encoded.append(code)
                output_bits += len(code)
            writer.write("".join(encoded))
        return EncodingStats(input_bits=8 * input_chars, output_bits=output_bits, missing=frozenset(missing))

    def encode_file(self, input_path, output_path, codes):
        with self._open_text(input_path) as reader:
            if os.path.isfile(output_path) and os.path.getsize(output_path) > 0:
                raise OutputNotEmptyError(output_path)
            # an undecodable input fails here, before the output is created
            head = reader.read(self.chunk_size)
            with self._open_text(output_path, "a") as writer:
                return self.encode_stream(reader, writer, codes, head=head)

    def encode(self, input_path, reference_path, output_path):
        """
        Encode input_path with the Huffman code of reference_path into output_path.

        Never raises for pipeline failures: I/O errors, undecodable text and
        precondition failures come back as an ERROR result carrying the
        exception. Characters of the input that have no code turn an
        otherwise successful run into a WARNING result.
        """
        try:
            tree, codes = self.build_codes(reference_path)
            leaves = self.logic.leaf_report(tree)
            self._report(*(f"{char}:{freq}:{code}" for char, freq, code in leaves))

            stats = self.encode_file(input_path, output_path, codes)
        except (HuffmanEncodingError, OSError, UnicodeError) as e:
            self._report(str(e), FAILURE_MESSAGE)
            return EncodingResult(EncodingStatus.ERROR, FAILURE_MESSAGE, error=e)

        self._report(
            f"Input File Size: {stats.input_bits} bits",
            f"Output File Size: {stats.output_bits} bits",
            f"Savings: {stats.savings} bits",
        )
        status = EncodingStatus.OK
        if not stats.complete:
            status = EncodingStatus.WARNING
            self._report(MISSING_CHARS_MESSAGE)
        self._report(SUCCESS_MESSAGE)
        return EncodingResult(status, SUCCESS_MESSAGE, codes=codes, leaves=leaves, stats=stats)
