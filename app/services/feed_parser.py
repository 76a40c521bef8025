"""Parsing of the pipe-delimited upstream feed."""

from __future__ import annotations

from typing import Sequence

FIELD_DELIMITER = "|"

FeedRecord = dict[str, str | None]


def parse_header(line: str) -> list[str]:
    return line.rstrip("\r").split(FIELD_DELIMITER)


def parse_feed(raw: str) -> list[FeedRecord]:
    """Turn a raw feed payload into records keyed by the header row.

    The first line names the fields. Blank data lines are skipped, short rows
    are padded with ``None`` and surplus values are dropped, so a malformed
    payload degrades into fewer or sparser records instead of raising.
    """

    lines = raw.split("\n")
    headers = parse_header(lines[0])

    records: list[FeedRecord] = []
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        records.append(build_record(headers, line.split(FIELD_DELIMITER)))
    return records


def build_record(headers: Sequence[str], values: Sequence[str]) -> FeedRecord:
    record: FeedRecord = {}
    for index, header in enumerate(headers):
        record[header] = values[index] if index < len(values) else None
    return record


__all__ = ["FIELD_DELIMITER", "FeedRecord", "build_record", "parse_feed", "parse_header"]
