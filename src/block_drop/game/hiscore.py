from __future__ import annotations

import logging
import os
import struct


logger = logging.getLogger(__name__)

DEFAULT_HISCORE_PATH = os.path.join(os.path.expanduser("~"), ".block_drop_hiscore")

# a single 4-byte big-endian signed int
_RECORD = struct.Struct(">i")


class HiScoreStore:
    """Best-effort storage for the high score.

    Any failure to read yields 0 and any failure to write is dropped; the
    game never stops over a lost high score.
    """

    def __init__(self, path: str = DEFAULT_HISCORE_PATH) -> None:
        self.path = path

    def read(self) -> int:
        try:
            with open(self.path, "rb") as f:
                data = f.read(_RECORD.size)
            (score,) = _RECORD.unpack(data)
        except FileNotFoundError:
            return 0
        except (OSError, struct.error) as exc:
            logger.warning("could not read hi score from %s: %s", self.path, exc)
            return 0
        return max(0, score)

    def write(self, score: int) -> None:
        try:
            data = _RECORD.pack(score)
            with open(self.path, "wb") as f:
                f.write(data)
        except (OSError, struct.error) as exc:
            logger.warning("could not write hi score to %s: %s", self.path, exc)
