# runtime/rng.py
from __future__ import annotations

from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


class RNGRegistry:
    """
    Named numpy Generator streams derived from one master seed.
    A stream depends only on (seed, scenario, name, parts), never on the order
    in which streams are requested.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _tag(str(scenario))

    @cache
    def _generator(self, parts: tuple[int, ...]) -> np.random.Generator:
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.scenario_tag, *parts])
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        return self._generator((_tag(name),))

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        norm = [_tag(name)]
        for p in parts:
            if isinstance(p, (int, np.integer)):
                norm.append(_u32(int(p)))
            else:
                norm.append(_tag(p if isinstance(p, str) else repr(p)))
        return self._generator(tuple(norm))
