"""Random container names."""

import os

from ...models.errors import GenerationError

UUID_BYTES = 16


def new_uuid() -> str:
    """Generate a random (version 4, RFC 4122 variant) UUID string.

    Raises:
        GenerationError: The OS random source failed or returned too few bytes
    """
    try:
        raw = os.urandom(UUID_BYTES)
    except (OSError, NotImplementedError) as e:
        raise GenerationError(f"Random source unavailable: {e}") from e
    if len(raw) != UUID_BYTES:
        raise GenerationError(
            f"Random source returned {len(raw)} bytes, expected {UUID_BYTES}"
        )

    b = bytearray(raw)
    # variant bits 10xx xxxx
    b[8] = b[8] & 0x3F | 0x80
    # version 4 (random) 0100 xxxx
    b[6] = b[6] & 0x0F | 0x40

    h = b.hex()
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"
