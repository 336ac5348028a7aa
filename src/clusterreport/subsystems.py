import re
from typing import Dict, Iterator, Optional, Tuple

MAX_WORDS = 4
WORD_LENGTH = 3


class SubsystemRegistry:
    """
    Assigns short, stable identifiers to subsystem names

    An identifier is built from the first letters of the words in the name and a sequence
    number so that similar names remain distinct. Once assigned an identifier is never reused
    or changed, so the same sequence of names always produces the same mapping

    Example:
        >>> registry = SubsystemRegistry()
        >>> registry.get_id('Histidine Biosynthesis')
        'HisBio1'
        >>> registry.get_id('Histidine biosynthesis')
        'HisBio2'
        >>> registry.get_id('Histidine Biosynthesis')
        'HisBio1'
    """

    def __init__(self):
        self._ids_by_name: Dict[str, str] = {}
        self._names_by_id: Dict[str, str] = {}
        self._next_suffix: Dict[str, int] = {}

    @staticmethod
    def prefix(name: str) -> str:
        words = [w for w in re.split(r'[^A-Za-z0-9]+', name) if w][:MAX_WORDS]
        prefix = ''.join(w[:WORD_LENGTH].capitalize() for w in words)
        return prefix or 'Sub'

    def get_id(self, name: str) -> str:
        """
        Returns:
            the identifier of a subsystem, assigning the next unused one if the name is new
        """
        if name in self._ids_by_name:
            return self._ids_by_name[name]
        prefix = self.prefix(name)
        suffix = self._next_suffix.get(prefix, 1)
        sub_id = f'{prefix}{suffix}'
        while sub_id in self._names_by_id:  # a prefix ending in digits can collide
            suffix += 1
            sub_id = f'{prefix}{suffix}'
        self._next_suffix[prefix] = suffix + 1
        self._ids_by_name[name] = sub_id
        self._names_by_id[sub_id] = name
        return sub_id

    def find_id(self, name: str) -> Optional[str]:
        return self._ids_by_name.get(name)

    def get_name(self, sub_id: str) -> Optional[str]:
        return self._names_by_id.get(sub_id)

    def items(self) -> Iterator[Tuple[str, str]]:
        """
        the (identifier, name) pairs in the order they were assigned
        """
        return iter(self._names_by_id.items())

    def __len__(self) -> int:
        return len(self._names_by_id)

    def __contains__(self, name) -> bool:
        return name in self._ids_by_name
