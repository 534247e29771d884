"""Program image (.obj) loading.

An image is a sequence of big-endian 16-bit words: the first is the
origin, the rest are stored from the origin upwards.
"""
import logging
import struct
from pathlib import Path

from .errors import ImageLoadError

log = logging.getLogger(__name__)


def parse_image(data: bytes):
    """Split raw image bytes into (origin, words).

    A trailing odd byte is ignored.
    """
    if len(data) < 2:
        raise ImageLoadError("image has no origin word")
    count = len(data) // 2
    origin, *words = struct.unpack(f">{count}H", data[:count * 2])
    return origin, words


def load_bytes(mem, data: bytes) -> int:
    origin, words = parse_image(data)
    stored = mem.load(origin, words)
    if stored < len(words):
        log.warning("image truncated at 0xFFFF: %d of %d words dropped",
                    len(words) - stored, len(words))
    log.debug("loaded %d words at 0x%04X", stored, origin)
    return origin


def load_image(mem, path) -> int:
    """Read an image file into `mem`. Returns the origin address."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ImageLoadError(f"cannot read {path}: {e.strerror or e}") from e
    return load_bytes(mem, data)
