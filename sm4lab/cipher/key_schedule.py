"""SM4 key expansion: 128-bit key -> 32 round keys."""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator, Tuple

from .constants import CK, FK, KEY_SIZE, ROUNDS, WORD_MASK
from .errors import InvalidKeyLength, InvalidRoundKeys
from .transforms import t_key


@dataclass(frozen=True)
class RoundKeys:
    """Immutable, indexable schedule of exactly 32 round-key words.

    Decryption consumes the same words back to front, so the schedule is a
    sequence rather than a one-shot iterator.
    """
    words: Tuple[int, ...]

    def __post_init__(self):
        words = tuple(self.words)
        if len(words) != ROUNDS:
            raise InvalidRoundKeys(f"Round key schedule must hold {ROUNDS} words, got {len(words)}")
        for w in words:
            if not isinstance(w, int) or not 0 <= w <= WORD_MASK:
                raise InvalidRoundKeys(f"Round key {w!r} is not an unsigned 32-bit word")
        object.__setattr__(self, "words", words)

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, index):
        return self.words[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

    def __reversed__(self) -> Iterator[int]:
        return reversed(self.words)

    def reversed(self) -> "RoundKeys":
        """Return the schedule in decryption order (rk31 ... rk0)."""
        return RoundKeys(self.words[::-1])


def expand_key(key: bytes) -> RoundKeys:
    """Derive the 32 round keys for a 16-byte key.

    K[0..3] = MK ^ FK, then K[i+4] = K[i] ^ T'(K[i+1] ^ K[i+2] ^ K[i+3] ^ CK[i])
    and rk[i] = K[i+4].
    """
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key))

    mk = struct.unpack(">4I", bytes(key))
    k = [mk[i] ^ FK[i] for i in range(4)]

    for i in range(ROUNDS):
        k.append(k[i] ^ t_key(k[i + 1] ^ k[i + 2] ^ k[i + 3] ^ CK[i]))

    return RoundKeys(tuple(k[4:]))
