# /// script
# requires-python = ">=3.8"
# dependencies = [
#     "genutility",
#     "rich",
# ]
# ///
"""Convert the raw area and epicenter code listings into sorted two-column csv files.

The raw files are plain streams of whitespace separated tokens which are read as
alternating code and name, regardless of line breaks.
"""

import csv
import logging
import re
import sys
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from genutility.exceptions import ParseError
from genutility.file import StdoutFile
from rich.highlighter import NullHighlighter
from rich.logging import RichHandler

logger = logging.getLogger(__name__)

Record = Tuple[str, str]

CONVERSIONS = (
    ("raw_area_code.txt", "area_code.csv"),
    ("raw_epicenter_code.txt", "epicenter_code.csv"),
)

CODE_LENGTH = 3

# ascii whitespace only, U+3000 and U+00A0 are part of a token
SEPARATOR = re.compile(r"[ \t\n\v\f\r]+")


class InvalidCodeFormat(ParseError):
    pass


def tokenize(text: str) -> List[str]:
    tokens: List[str] = []
    for line in text.split("\n"):
        tokens.extend(token for token in SEPARATOR.split(line) if token)
    return tokens


def pairs(tokens: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """Returns an iterator of consecutive token pairs. A trailing token without partner is discarded."""

    it = iter(tokens)
    return zip(it, it)


def to_record(code: str, name: str) -> Optional[Record]:
    if not code or not name:
        return None
    return (code, name)


def parse_records(text: str) -> List[Record]:
    """Parses raw text into records sorted by code and then by name.

    Codes are compared as strings, so "10" sorts before "9".
    """

    tokens = tokenize(text)
    if len(tokens) % 2:
        logger.debug("Dropping unpaired trailing token `%s`", tokens[-1])

    records: List[Record] = []
    for code, name in pairs(tokens):
        record = to_record(code, name)
        if record is None:
            logger.debug("Skipping incomplete pair (%r, %r)", code, name)
            continue
        records.append(record)

    return sorted(records)


def write_csv(records: Iterable[Record], destpath: str) -> None:
    with StdoutFile(destpath, "wt", encoding="utf-8", newline="") as csvfile:
        csvwriter = csv.writer(csvfile, lineterminator="\n")
        csvwriter.writerows(records)


def convert(srcpath: str, destpath: str) -> None:
    with open(srcpath, encoding="utf-8") as fr:
        text = fr.read()

    records = parse_records(text)
    write_csv(records, destpath)
    logger.info("Wrote %d records from `%s` to `%s`", len(records), srcpath, destpath)


def load_codes(path: str) -> Dict[str, str]:
    """Reads a converted csv file back into a code to name mapping."""

    codes: Dict[str, str] = {}
    with open(path, encoding="utf-8", newline="") as fr:
        for i, row in enumerate(csv.reader(fr), 1):
            if len(row) != 2:
                raise InvalidCodeFormat(f"Expected 2 fields in line {i}, got {len(row)}")

            code, name = row
            if len(code.encode("utf-8")) != CODE_LENGTH:
                raise InvalidCodeFormat(f"Invalid code `{code}` in line {i}")

            codes[code] = name

    return codes


def main() -> int:
    handler = RichHandler(log_time_format="%Y-%m-%d %H-%M-%S%Z", highlighter=NullHighlighter())
    FORMAT = "%(message)s"
    logging.basicConfig(level=logging.INFO, format=FORMAT, handlers=[handler])

    for srcpath, destpath in CONVERSIONS:
        convert(srcpath, destpath)

    return 0


if __name__ == "__main__":
    sys.exit(main())
