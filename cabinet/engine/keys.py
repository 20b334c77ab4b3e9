"""Keys games may bind through the engine."""

from enum import Enum


class Key(Enum):
    """Game keys. Values are the host binding names."""
    W = 'key_W'
    A = 'key_A'
    S = 'key_S'
    D = 'key_D'
    SPACE = 'key_Space'
    ESCAPE = 'key_Escape'

    @property
    def host_name(self) -> str:
        return self.value

    @classmethod
    def from_host_name(cls, name: str) -> 'Key':
        """Look up a key by its host binding name.

        Raises:
            ValueError: Name is not a game key
        """
        return cls(name)
