"""
Name Abbreviation Service.

If one has a known set of types, and therefore a known set of type names,
one can abbreviate or even leave out the namespace of a type without
introducing ambiguities.

Given an ordered list of namespaces, NameAbbrevService abbreviates the
identifiers of types from those namespaces to "alias:ShortName" pairs and
resolves such abbreviations back to the proper TypeDescriptor.

ORDERING CONTRACT:
    The order of namespaces is vitally important. If resolve() runs against
    a service built with a different namespace order than the one used for
    abbreviate(), an abbreviation may resolve to the wrong type.

Example:
    service = NameAbbrevService(
        [Namespace("de.example.pkg1", "ptk"), Namespace("de.example.pkg2", "ptk")],
        registry=registry,
    )
    service.abbreviate(registry.get("de.example.pkg1.ClassB"))   # ("ClassB", "ptk")
    service.abbreviate(registry.get("de.example.pkg2.ClassB"))   # ("de.example.pkg2.ClassB", "ptk")
    service.resolve("ClassB")                                    # de.example.pkg1.ClassB
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from nameabbrev.cache import BidiCache, make_tag, split_tag
from nameabbrev.model import (
    BUILTIN_ALIAS,
    BUILTIN_NAMESPACE,
    PRIMITIVE_KINDS,
    PRIMITIVES,
    ArrayType,
    Namespace,
    TypeDescriptor,
    TypeRef,
)
from nameabbrev.registry import TypeRegistry

logger = logging.getLogger(__name__)

_ARRAY_SUFFIX_RE = re.compile(r"((?:\[\])*)$")


class UnregisteredTypeError(ValueError):
    """Raised by strict abbreviate() for a type outside every namespace."""

    def __init__(self, type_name: str):
        super().__init__(f"Given type is not part of any registered namespace: {type_name}")
        self.type_name = type_name


class TypeNotFoundError(LookupError):
    """Raised by resolve() when no namespace yields a matching type."""

    def __init__(self, abbreviation: str, reason: Optional[str] = None):
        message = reason or "not found in any registered namespace"
        super().__init__(f"Given abbreviated type name was {message}: {abbreviation}")
        self.abbreviation = abbreviation


NamespaceLike = Union[Namespace, Sequence[str]]


class NameAbbrevService:
    """
    Bidirectional abbreviation of type identifiers.

    Properties:
        registry:
            TypeRegistry every lookup goes through
        strict:
            If True, abbreviate() raises UnregisteredTypeError for types no
            namespace relates to. If False it returns the qualified
            identifier with an empty alias.

    Not safe for concurrent use; one caller owns one instance.
    """

    def __init__(
        self,
        namespaces: Iterable[NamespaceLike] = (),
        registry: Optional[TypeRegistry] = None,
        strict: bool = True,
    ) -> None:
        self.strict = strict
        self.registry = registry if registry is not None else TypeRegistry()

        self._namespaces: Tuple[Namespace, ...] = (BUILTIN_NAMESPACE,) + tuple(
            _as_namespace(ns) for ns in namespaces
        )

        # Maps alias -> namespace URI
        self._used_prefixes: Dict[str, str] = {}
        for ns in self._namespaces:
            if ns.uri is not None:
                self._used_prefixes[ns.alias] = ns.uri

        # Every alias in order of first appearance; fixes the tie-break when
        # more than one alias could match.
        self._aliases: Tuple[str, ...] = tuple(dict.fromkeys(ns.alias for ns in self._namespaces))

        self._cache = BidiCache()
        for kind in PRIMITIVE_KINDS:
            self._cache.put(PRIMITIVES[kind], make_tag(BUILTIN_ALIAS, kind))

        # Types that abbreviate to the tag of a compatible supertype
        self._widened: Dict[TypeDescriptor, str] = {}

    @property
    def namespaces(self) -> Tuple[Namespace, ...]:
        """Registered namespaces, built-in namespace first."""
        return self._namespaces

    def get_used_prefixes(self) -> Mapping[str, str]:
        """Read-only snapshot of alias -> URI."""
        return MappingProxyType(dict(self._used_prefixes))

    # =========================================================================
    # Abbreviation
    # =========================================================================

    def abbreviate(self, type_ref: TypeRef) -> Tuple[str, str]:
        """
        Return the abbreviated form of the given type's identifier.

        Args:
            type_ref: TypeDescriptor or ArrayType

        Returns:
            (short_form, alias). short_form is the simple name when it is
            unambiguous, otherwise the qualified identifier; array types
            carry one "[]" per dimension.

        Raises:
            UnregisteredTypeError: In strict mode, if the type is not part of
                any registered namespace
        """
        if isinstance(type_ref, ArrayType):
            descriptor = type_ref.element
            suffix = "[]" * type_ref.dimensions
        elif isinstance(type_ref, TypeDescriptor):
            descriptor = type_ref
            suffix = ""
        else:
            raise TypeError(f"Unsupported type reference: {type(type_ref)}")

        descriptor = self._interface_for(descriptor)

        tag = self._cache.tag_of(descriptor) or self._widened.get(descriptor)
        if tag is not None:
            alias, short_name = split_tag(tag)
            return short_name + suffix, alias

        simple_name = descriptor.simple_name
        qualified = descriptor.name

        for alias in self._aliases:
            # The short name was already given to another type
            if self._cache.has_tag(make_tag(alias, simple_name)):
                self._remember(descriptor, alias, qualified)
                logger.debug("%s:%s is taken, using qualified name for %s", alias, simple_name, qualified)
                return qualified + suffix, alias

        for ns in self._namespaces:
            other = self.registry.find(ns.prefix, simple_name)
            if other is None:
                continue

            # First namespace containing this simple name owns the short name.
            self._remember(other, ns.alias, simple_name)

            if other == descriptor:
                return simple_name + suffix, ns.alias
            if self.registry.is_assignable(other, descriptor):
                self._widened[descriptor] = make_tag(ns.alias, simple_name)
                return simple_name + suffix, ns.alias

            self._remember(descriptor, ns.alias, qualified)
            logger.debug("%s belongs to %s, using qualified name for %s", simple_name, other.name, qualified)
            return qualified + suffix, ns.alias

        if not self.strict:
            return qualified + suffix, ""

        raise UnregisteredTypeError(qualified)

    def _interface_for(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Swap an implementation for its interface, if it has one."""
        current = self.registry.get(descriptor.name) or descriptor
        if current.interface is None:
            return current
        interface = self.registry.get(current.interface)
        if interface is not None and self.registry.is_assignable(interface, current):
            return interface
        return current

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, abbreviation: str) -> TypeRef:
        """
        Resolve an abbreviated (or qualified) type name.

        Args:
            abbreviation: Short or qualified name, optionally "[]"-suffixed

        Returns:
            TypeDescriptor, or ArrayType for suffixed names. Interfaces with
            a registered implementation resolve to the implementation.

        Raises:
            TypeNotFoundError: If the name cannot be found in any namespace
        """
        dimensions = _array_dimensions(abbreviation)
        name = abbreviation[: len(abbreviation) - 2 * dimensions]
        if not name:
            raise TypeNotFoundError(abbreviation)

        for alias in self._aliases:
            cached = self._cache.type_of(make_tag(alias, name))
            if cached is not None:
                return self._concrete_array(cached, dimensions)

        if "." in name:
            # Full name was given
            descriptor = self.registry.get(name)
            if descriptor is None:
                raise TypeNotFoundError(abbreviation, "not a registered type")
            self._remember(descriptor, self._alias_for(descriptor), name)
            return self._concrete_array(descriptor, dimensions)

        for ns in self._namespaces:
            descriptor = self.registry.find(ns.prefix, name)
            if descriptor is not None:
                self._remember(descriptor, ns.alias, name)
                return self._concrete_array(descriptor, dimensions)

        raise TypeNotFoundError(abbreviation)

    def _concrete_array(self, descriptor: TypeDescriptor, dimensions: int) -> TypeRef:
        current = self.registry.get(descriptor.name) or descriptor
        if current.is_interface:
            implementation = self.registry.implementation_of(current)
            if implementation is not None:
                current = implementation
            else:
                logger.debug("Interface %s has no implementation, resolving to itself", current.name)
        return self.registry.array_of(current, dimensions)

    def _alias_for(self, descriptor: TypeDescriptor) -> str:
        for ns in self._namespaces:
            if ns.prefix == descriptor.namespace:
                return ns.alias
        return self._aliases[0]

    def _remember(self, descriptor: TypeDescriptor, alias: str, short_name: str) -> None:
        # An existing tag is never replaced; abbreviate() must stay stable.
        if self._cache.put_if_absent(descriptor, make_tag(alias, short_name)):
            logger.debug("Cached %s as %s:%s", descriptor.name, alias, short_name)


def _as_namespace(item: NamespaceLike) -> Namespace:
    if isinstance(item, Namespace):
        return item
    return Namespace(*item)


def _array_dimensions(name: str) -> int:
    return len(_ARRAY_SUFFIX_RE.search(name).group(1)) // 2
