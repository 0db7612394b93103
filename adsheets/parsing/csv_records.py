"""
adsheets/parsing/csv_records.py

RFC 4180 record splitter for exported sheet CSV.

Single pass over the character stream with two states (inside or outside
a quoted field). Handles:

- ``""`` inside a quoted field as one literal quote;
- commas, CR and LF inside quotes as field content;
- ``\\r\\n``, lone ``\\n`` and lone ``\\r`` as record terminators;
- a final record without a trailing terminator.

Records whose fields are all blank are dropped. The splitter never raises:
an unterminated quote swallows the rest of the input into the open field.
"""

from __future__ import annotations

RawRecord = list[str]


def _is_blank_record(record: RawRecord) -> bool:
    return not any(field.strip() for field in record)


def parse_csv_records(text: str) -> list[RawRecord]:
    """
    Split CSV text into records of raw string fields.
    """

    records: list[RawRecord] = []
    current_record: RawRecord = []
    field_chars: list[str] = []
    in_quotes = False

    def end_record() -> None:
        nonlocal current_record
        current_record.append("".join(field_chars))
        field_chars.clear()
        if not _is_blank_record(current_record):
            records.append(current_record)
        current_record = []

    index = 0
    length = len(text)
    while index < length:
        char = text[index]

        if in_quotes:
            if char == '"':
                if index + 1 < length and text[index + 1] == '"':
                    field_chars.append('"')
                    index += 1
                else:
                    in_quotes = False
            else:
                field_chars.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            current_record.append("".join(field_chars))
            field_chars.clear()
        elif char == "\r":
            # CRLF: let the LF close the record.
            if index + 1 >= length or text[index + 1] != "\n":
                end_record()
        elif char == "\n":
            end_record()
        else:
            field_chars.append(char)

        index += 1

    end_record()
    return records
