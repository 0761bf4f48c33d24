from __future__ import annotations

import logging
from typing import Iterator

logger = logging.getLogger(__name__)

NEWLINE = b"\n"


def iter_split(payload: bytes, limit: int) -> Iterator[memoryview]:
    """
    Yield views of payload that each fit in `limit` bytes, cutting only at newlines.

    Each step looks for the rightmost newline in payload[offset : offset + limit],
    both ends inclusive, emits everything before it and drops the newline itself.
    When the window holds no newline the rest of the payload is emitted whole,
    even though it is larger than `limit`. A limit of 0 or less disables splitting.
    """
    if not isinstance(payload, (bytes, bytearray)):
        payload = bytes(payload)
    view = memoryview(payload)
    end = len(payload)

    if limit <= 0 or end <= limit:
        yield view
        return

    offset = 0
    while end - offset > limit:
        cut = payload.rfind(NEWLINE, offset, offset + limit + 1)
        if cut < 0:
            logger.debug(
                "no newline within %d bytes, sending %d bytes unsplit", limit, end - offset
            )
            break
        yield view[offset:cut]
        offset = cut + 1
        if offset == end:
            return

    yield view[offset:]


def split(payload: bytes, limit: int) -> list[memoryview]:
    return list(iter_split(payload, limit))
