"""
Short code generation strategies for URL shortener.
Uses Strategy Pattern to allow different random sources.

Strategies only produce candidates. Uniqueness is settled by the Registry at
insertion time, so a strategy never looks at stored records.
"""

import random
import secrets
import string
from abc import ABC, abstractmethod

SHORT_CODE_ALPHABET = string.ascii_letters + string.digits


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    def __init__(self, length: int = 8):
        if length < 1:
            raise ValueError(f"Short code length must be positive, got {length}")
        self.length = length
        self.characters = SHORT_CODE_ALPHABET

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short code.

        Returns:
            `length` characters drawn uniformly from [A-Za-z0-9]
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Uniform random codes from the `random` module.

    Pros: Fast, simple, 62^8 keyspace makes collisions rare
    Cons: Predictable to anyone who can observe enough output
    """

    def __init__(self, length: int = 8, rng: random.Random = None):
        super().__init__(length)
        self.rng = rng or random.Random()

    def generate(self) -> str:
        return ''.join(self.rng.choice(self.characters) for _ in range(self.length))


class SecureShortCodeStrategy(ShortCodeStrategy):
    """
    Uniform random codes from the OS CSPRNG.

    Pros: Codes can't be guessed from earlier ones
    Cons: Slower than `random`
    """

    def generate(self) -> str:
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))
