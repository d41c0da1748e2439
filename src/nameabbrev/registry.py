"""
Type Registry: the statically supplied type-metadata provider.

The abbreviation service never discovers types on its own. The caller builds
a TypeRegistry once at startup, listing every type that may be abbreviated
or resolved, and hands it to the service.

The registry answers four questions:
    - Does identifier X name a known type?            get()
    - Is there a type called S inside namespace P?    find()
    - Is type A assignable to type B?                 is_assignable()
    - What is the concrete/abstract counterpart?      implementation_of(), interface_of()
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, Iterator, Optional, Set, Union

from nameabbrev.model import PRIMITIVES, ArrayType, TypeDescriptor

logger = logging.getLogger(__name__)

IMPL_SUFFIX = "Impl"


class RegistryError(ValueError):
    """Raised when a registration is inconsistent."""
    pass


class TypeRegistry:
    """
    Ordered collection of TypeDescriptors keyed by qualified identifier.

    Primitive kinds are always known and cannot be registered again.
    Pairing links are completed in both directions as soon as both sides
    are registered, regardless of which side comes first.
    """

    def __init__(self, types: Iterable[TypeDescriptor] = ()) -> None:
        self._types: Dict[str, TypeDescriptor] = {}
        # link target -> identifiers whose interface/implementation names it
        self._referrers: Dict[str, Set[str]] = {}
        self.register_all(types)

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._types.values()))

    def __contains__(self, item: Union[str, TypeDescriptor]) -> bool:
        return self.get(_name_of(item)) is not None

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """
        Add a descriptor and complete any pairing it takes part in.

        Returns:
            The stored descriptor (links may have been filled in)

        Raises:
            RegistryError: On duplicates, primitives or conflicting pairings
        """
        name = descriptor.name
        if not name or name.startswith(".") or name.endswith("."):
            raise RegistryError(f"Invalid type identifier: {name!r}")
        if name in PRIMITIVES:
            raise RegistryError(f"Primitive kind cannot be registered: {name}")
        if name in self._types:
            raise RegistryError(f"Type already registered: {name}")
        if name in (descriptor.interface, descriptor.implementation):
            raise RegistryError(f"Type cannot be paired with itself: {name}")

        # Previous value of every entry touched; None means newly added
        undo: Dict[str, Optional[TypeDescriptor]] = {name: None}
        self._types[name] = descriptor
        try:
            self._complete_pairing(name, undo)
        except RegistryError:
            for changed, previous in undo.items():
                if previous is None:
                    del self._types[changed]
                else:
                    self._types[changed] = previous
            raise

        for target in (descriptor.interface, descriptor.implementation):
            if target is not None:
                self._referrers.setdefault(target, set()).add(name)
        return self._types[name]

    def register_all(self, descriptors: Iterable[TypeDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def _complete_pairing(self, name: str, undo: Dict[str, Optional[TypeDescriptor]]) -> None:
        descriptor = self._types[name]

        if descriptor.interface is not None and descriptor.interface in self._types:
            self._pair(descriptor.interface, name, undo)
        if descriptor.implementation is not None and descriptor.implementation in self._types:
            self._pair(name, descriptor.implementation, undo)

        # Counterparts registered earlier that point at us
        for other_name in sorted(self._referrers.get(name, ())):
            other = self._types[other_name]
            if other.interface == name:
                self._pair(name, other_name, undo)
            elif other.implementation == name:
                self._pair(other_name, name, undo)

    def _pair(
        self,
        interface_name: str,
        implementation_name: str,
        undo: Optional[Dict[str, Optional[TypeDescriptor]]] = None,
    ) -> None:
        interface = self._types[interface_name]
        implementation = self._types[implementation_name]

        if interface.implementation not in (None, implementation_name):
            raise RegistryError(
                f"{interface_name} is already paired with {interface.implementation}, "
                f"cannot pair with {implementation_name}"
            )
        if implementation.interface not in (None, interface_name):
            raise RegistryError(
                f"{implementation_name} is already paired with {implementation.interface}, "
                f"cannot pair with {interface_name}"
            )

        if interface.implementation != implementation_name:
            if undo is not None:
                undo.setdefault(interface_name, interface)
            self._types[interface_name] = replace(interface, implementation=implementation_name)
        if implementation.interface != interface_name:
            if undo is not None:
                undo.setdefault(implementation_name, implementation)
            self._types[implementation_name] = replace(implementation, interface=interface_name)

    def link_implementations(self, suffix: str = IMPL_SUFFIX) -> int:
        """
        Pair interfaces with implementations by naming convention.

        For every unpaired type whose simple name ends with `suffix`, try
        the enclosing type first (pkg.Node.NodeImpl -> pkg.Node), then the
        sibling without the suffix (pkg.NodeImpl -> pkg.Node). A pair is only
        made when the implementation is assignable to the interface.

        Returns:
            Number of pairs made
        """
        linked = 0
        for descriptor in list(self._types.values()):
            current = self._types[descriptor.name]
            simple = current.simple_name
            if current.interface is not None or not simple.endswith(suffix) or simple == suffix:
                continue

            base = simple[: -len(suffix)]
            candidates = []
            if current.namespace.rsplit(".", 1)[-1] == base:
                candidates.append(current.namespace)
            if current.namespace:
                candidates.append(current.namespace + "." + base)
            else:
                candidates.append(base)

            for candidate in candidates:
                interface = self._types.get(candidate)
                if interface is None or interface.implementation is not None:
                    continue
                if not self.is_assignable(interface, current):
                    continue
                self._pair(candidate, current.name)
                logger.debug("Paired %s with implementation %s", candidate, current.name)
                linked += 1
                break
        return linked

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, name: str) -> Optional[TypeDescriptor]:
        """
        Retrieve a descriptor by qualified identifier.

        Returns:
            TypeDescriptor or None if not found
        """
        primitive = PRIMITIVES.get(name)
        if primitive is not None:
            return primitive
        return self._types.get(name)

    def find(self, prefix: str, simple_name: str) -> Optional[TypeDescriptor]:
        """Look up the type called `simple_name` directly inside `prefix`."""
        return self._types.get(prefix + "." + simple_name)

    def is_assignable(
        self,
        target: Union[str, TypeDescriptor],
        source: Union[str, TypeDescriptor],
    ) -> bool:
        """
        True when a value of type `source` can be used where `target` is
        expected: same identifier, or `target` is on the supertype chain.
        """
        target_name = _name_of(target)
        source_name = _name_of(source)
        if target_name == source_name:
            return True

        seen: Set[str] = set()
        pending = [source_name]
        while pending:
            current = self._types.get(pending.pop())
            if current is None:
                continue
            for parent in current.supertypes:
                if parent == target_name:
                    return True
                if parent not in seen:
                    seen.add(parent)
                    pending.append(parent)
        return False

    def implementation_of(self, interface: Union[str, TypeDescriptor]) -> Optional[TypeDescriptor]:
        descriptor = self.get(_name_of(interface))
        if descriptor is None or descriptor.implementation is None:
            return None
        return self._types.get(descriptor.implementation)

    def interface_of(self, implementation: Union[str, TypeDescriptor]) -> Optional[TypeDescriptor]:
        descriptor = self.get(_name_of(implementation))
        if descriptor is None or descriptor.interface is None:
            return None
        return self._types.get(descriptor.interface)

    @staticmethod
    def array_of(element: TypeDescriptor, dimensions: int = 1) -> Union[TypeDescriptor, ArrayType]:
        """
        Build the array type of `element` with the given dimensionality.

        A dimensionality of 0 returns the element unchanged.
        """
        if dimensions < 0:
            raise RegistryError(f"Array dimensions must not be negative: {dimensions}")
        if dimensions == 0:
            return element
        return ArrayType(element=element, dimensions=dimensions)


def _name_of(item: Union[str, TypeDescriptor]) -> str:
    if isinstance(item, TypeDescriptor):
        return item.name
    return item
