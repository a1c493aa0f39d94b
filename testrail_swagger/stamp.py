"""Integrity stamp for generated documents.

The stamp is two YAML comment lines placed above the document::

    # dynamically generated by testrail-swagger on 2024-05-01
    # checksum sha256:<lowercase hex digest of the document below>

The digest covers the UTF-8 bytes of everything after the second line, so a
consumer can check a stored document with verify_stamp() without re-running
the generator.
"""

from __future__ import annotations

import datetime
import hashlib
import re

DIGEST_ALGORITHM = "sha256"
GENERATOR_NAME = "testrail-swagger"

_GENERATED_RE = re.compile(r"^# dynamically generated by (?P<generator>.+) on (?P<date>\S+)$")
_CHECKSUM_RE = re.compile(r"^# checksum (?P<algorithm>[a-z0-9]+):(?P<digest>[0-9a-f]+)$")


class StampError(ValueError):
    """Raised when a stamped document has no readable stamp."""


def compute_digest(text: str) -> str:
    """SHA-256 of the document text, lowercase hex."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def stamp(
    text: str,
    *,
    generated_on: datetime.date | None = None,
    generator: str = GENERATOR_NAME,
) -> str:
    """Prepend the generation date and checksum comments to a document."""
    generated_on = generated_on or datetime.date.today()
    header = (
        f"# dynamically generated by {generator} on {generated_on.isoformat()}\n"
        f"# checksum {DIGEST_ALGORITHM}:{compute_digest(text)}\n"
    )
    return header + text


def split_stamp(stamped: str) -> tuple[str, str]:
    """Return (recorded digest, document body) of a stamped document."""
    lines = stamped.split("\n", 2)
    if len(lines) < 3 or not _GENERATED_RE.match(lines[0]):
        raise StampError("Document does not start with a generation stamp")
    checksum = _CHECKSUM_RE.match(lines[1])
    if checksum is None:
        raise StampError(f"Malformed checksum line: {lines[1]!r}")
    if checksum.group("algorithm") != DIGEST_ALGORITHM:
        raise StampError(f"Unsupported checksum algorithm: {checksum.group('algorithm')}")
    return checksum.group("digest"), lines[2]


def verify_stamp(stamped: str) -> bool:
    """True when the recorded checksum matches the document body."""
    recorded, body = split_stamp(stamped)
    return recorded == compute_digest(body)
