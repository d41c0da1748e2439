"""
Example registry for the two-package collision scenario.

Builds pkg1 (ClassA, ClassB) and pkg2 (ClassB, ClassC), both under the
alias "ptk", plus an interface/implementation pair (Node/NodeImpl) in pkg1.
pkg2.ClassB is a different type than pkg1.ClassB, so whichever package is
registered first owns the short name "ClassB".
"""
from typing import List

from nameabbrev.model import Namespace, TypeDescriptor
from nameabbrev.registry import TypeRegistry


EXAMPLE_BASE = "de.example"
PKG1 = EXAMPLE_BASE + ".pkg1"
PKG2 = EXAMPLE_BASE + ".pkg2"
EXAMPLE_ALIAS = "ptk"
EXAMPLE_URI = "http://example.org/test-dummy-for-ptk"


def build_example_registry() -> TypeRegistry:
    registry = TypeRegistry()

    registry.register_all([
        TypeDescriptor(name=f"{PKG1}.ClassA"),
        TypeDescriptor(name=f"{PKG1}.ClassB"),
        TypeDescriptor(name=f"{PKG2}.ClassB"),
        TypeDescriptor(name=f"{PKG2}.ClassC", supertypes=(f"{PKG1}.ClassA",)),
    ])

    # Interface with a sibling implementation
    registry.register(
        TypeDescriptor(name=f"{PKG1}.Node", is_interface=True),
    )
    registry.register(
        TypeDescriptor(
            name=f"{PKG1}.NodeImpl",
            supertypes=(f"{PKG1}.Node",),
            interface=f"{PKG1}.Node",
        )
    )

    return registry


def example_namespaces(pkg1_first: bool = True) -> List[Namespace]:
    """pkg1 and pkg2 under one alias; only the first carries the URI."""
    first, second = (PKG1, PKG2) if pkg1_first else (PKG2, PKG1)
    return [
        Namespace(prefix=first, alias=EXAMPLE_ALIAS, uri=EXAMPLE_URI),
        Namespace(prefix=second, alias=EXAMPLE_ALIAS),
    ]
