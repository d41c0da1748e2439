"""In-memory type <-> tag cache."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from nameabbrev.model import TypeDescriptor


def make_tag(alias: str, short_name: str) -> str:
    return alias + ":" + short_name


def split_tag(tag: str) -> Tuple[str, str]:
    """Split "alias:short" into (alias, short)."""
    alias, _, short_name = tag.partition(":")
    return alias, short_name


class BidiCache:
    """Bidirectional TypeDescriptor <-> "alias:short" mapping.

    Both directions are updated on every insert. Putting a key or a value
    that is already mapped drops the stale pair first, so the two dicts are
    always exact inverses of each other.
    """

    def __init__(self) -> None:
        self._type_to_tag: Dict[TypeDescriptor, str] = {}
        self._tag_to_type: Dict[str, TypeDescriptor] = {}

    def put(self, descriptor: TypeDescriptor, tag: str) -> None:
        """Map `descriptor` to `tag`, evicting stale pairs on either side."""
        old_tag = self._type_to_tag.pop(descriptor, None)
        if old_tag is not None:
            del self._tag_to_type[old_tag]
        old_type = self._tag_to_type.pop(tag, None)
        if old_type is not None:
            del self._type_to_tag[old_type]
        self._type_to_tag[descriptor] = tag
        self._tag_to_type[tag] = descriptor

    def put_if_absent(self, descriptor: TypeDescriptor, tag: str) -> bool:
        """Insert only when neither the type nor the tag is mapped yet."""
        if descriptor in self._type_to_tag or tag in self._tag_to_type:
            return False
        self.put(descriptor, tag)
        return True

    def tag_of(self, descriptor: TypeDescriptor) -> Optional[str]:
        return self._type_to_tag.get(descriptor)

    def type_of(self, tag: str) -> Optional[TypeDescriptor]:
        return self._tag_to_type.get(tag)

    def has_type(self, descriptor: TypeDescriptor) -> bool:
        return descriptor in self._type_to_tag

    def has_tag(self, tag: str) -> bool:
        return tag in self._tag_to_type

    def items(self) -> Iterator[Tuple[TypeDescriptor, str]]:
        return iter(list(self._type_to_tag.items()))

    @property
    def size(self) -> int:
        """Number of cached pairs."""
        return len(self._type_to_tag)

    def __len__(self) -> int:
        return self.size
