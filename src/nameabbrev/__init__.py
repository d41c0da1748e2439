"""
Name Abbreviation Package

Compact, reversible type tags ("alias:ShortName") for fully-qualified type
identifiers, disambiguated against an ordered list of namespaces.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Runtime reflection or class loading
    - Any particular serialization format of the caller
    - Threads or I/O

Every type the service may see is described up front in a TypeRegistry.
The namespace order handed to the service is part of the contract:
abbreviate() and resolve() are only inverses under the same order.
"""

from nameabbrev.model import ArrayType, Namespace, TypeDescriptor
from nameabbrev.registry import RegistryError, TypeRegistry
from nameabbrev.service import NameAbbrevService, TypeNotFoundError, UnregisteredTypeError

__version__ = "0.1.0"

__all__ = [
    "ArrayType",
    "Namespace",
    "TypeDescriptor",
    "TypeRegistry",
    "RegistryError",
    "NameAbbrevService",
    "TypeNotFoundError",
    "UnregisteredTypeError",
]
