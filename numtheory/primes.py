# numtheory/primes.py
from typing import List
import numpy as np


def generate_primes(n: int) -> List[int]:
    """All primes <= n in ascending order (Sieve of Eratosthenes)."""
    n = int(n)
    if n < 2:
        return []
    sieve = np.ones(n + 1, dtype=bool)
    sieve[:2] = False
    for i in range(2, int(n ** 0.5) + 1):
        if sieve[i]:
            sieve[i * i::i] = False
    return np.flatnonzero(sieve).tolist()
