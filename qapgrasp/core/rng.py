"""
Portable pseudo-random stream for GRASP.

Minimal standard multiplicative congruential generator
x' = 16807 * x mod (2^31 - 1), evaluated with Schrage's decomposition so that
no intermediate product exceeds 31 bits.

Reference: Park & Miller (1988) "Random number generators: good ones are hard
to find." Communications of the ACM 31(10), pp. 1192-1201.
Schrage (1979) "A more portable Fortran random number generator."
ACM Transactions on Mathematical Software 5(2), pp. 132-138.
"""
from __future__ import annotations

MODULUS = 2147483647    # 2^31 - 1
MULTIPLIER = 16807
B15 = 32768
B16 = 65536
SCALE = 4.656612875e-10  # ~ 1 / (2^31 - 1)


def randp(seed: int) -> tuple[float, int]:
    """
    Advance the generator once.

    Args:
        seed: current state, 1 <= seed <= 2^31 - 2

    Returns:
        (value in [0, 1), next seed)
    """
    xhi = seed // B16
    xalo = (seed - xhi * B16) * MULTIPLIER
    leftlo = xalo // B16
    fhi = xhi * MULTIPLIER + leftlo
    k = fhi // B15
    seed = (((xalo - leftlo * B16) - MODULUS) + (fhi - k * B15) * B16) + k
    if seed < 0:
        seed += MODULUS
    return seed * SCALE, seed


class RandomStream:
    """Generator object threading the seed between draws."""

    def __init__(self, seed: int):
        self.seed = seed

    def draw(self) -> float:
        value, self.seed = randp(self.seed)
        return value

    def __repr__(self) -> str:
        return f"RandomStream(seed={self.seed})"
