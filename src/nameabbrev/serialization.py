"""
Serialization helpers for namespace lists and type registries.

Provides lossless JSON/YAML round-trip via intermediate dict representation,
so a caller can keep its registry in a file and load it at startup.
This module intentionally keeps serialization structure stable and explicit.

Registry document:

    types:
      - name: de.example.pkg1.Node
        interface_type: true
        implementation: de.example.pkg1.NodeImpl
      - name: de.example.pkg1.NodeImpl
        supertypes: [de.example.pkg1.Node]
        interface: de.example.pkg1.Node

Namespace document:

    namespaces:
      - {prefix: de.example.pkg1, alias: ptk, uri: http://example.org/ptk}
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

import yaml

from nameabbrev.model import Namespace, TypeDescriptor
from nameabbrev.registry import RegistryError, TypeRegistry


class SerializationError(ValueError):
    """Raised when a registry or namespace document is malformed."""
    pass


def namespace_to_dict(ns: Namespace) -> Dict[str, Any]:
    return {"prefix": ns.prefix, "alias": ns.alias, "uri": ns.uri}


def namespace_from_dict(d: Dict[str, Any]) -> Namespace:
    try:
        return Namespace(prefix=d["prefix"], alias=d["alias"], uri=d.get("uri"))
    except (KeyError, TypeError, AttributeError) as e:
        raise SerializationError(f"Invalid namespace entry {d!r}: {e}") from e


def type_to_dict(t: TypeDescriptor) -> Dict[str, Any]:
    return {
        "name": t.name,
        "supertypes": list(t.supertypes),
        "interface_type": t.is_interface,
        "implementation": t.implementation,
        "interface": t.interface,
    }


def type_from_dict(d: Dict[str, Any]) -> TypeDescriptor:
    try:
        return TypeDescriptor(
            name=d["name"],
            supertypes=tuple(d.get("supertypes") or ()),
            is_interface=bool(d.get("interface_type", False)),
            implementation=d.get("implementation"),
            interface=d.get("interface"),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise SerializationError(f"Invalid type entry {d!r}: {e}") from e


def registry_to_dict(registry: TypeRegistry) -> Dict[str, Any]:
    return {"types": [type_to_dict(t) for t in registry]}


def registry_from_dict(d: Dict[str, Any]) -> TypeRegistry:
    if not isinstance(d, dict):
        raise SerializationError(f"Registry document must be a mapping, got {type(d).__name__}")
    registry = TypeRegistry()
    try:
        registry.register_all(type_from_dict(t) for t in d.get("types") or [])
    except RegistryError as e:
        raise SerializationError(str(e)) from e
    return registry


def namespaces_to_dict(namespaces: Sequence[Namespace]) -> Dict[str, Any]:
    return {"namespaces": [namespace_to_dict(ns) for ns in namespaces]}


def namespaces_from_dict(d: Dict[str, Any]) -> List[Namespace]:
    if not isinstance(d, dict):
        raise SerializationError(f"Namespace document must be a mapping, got {type(d).__name__}")
    return [namespace_from_dict(ns) for ns in d.get("namespaces") or []]


def registry_to_json(registry: TypeRegistry) -> str:
    return json.dumps(registry_to_dict(registry), sort_keys=True)


def registry_from_json(s: str) -> TypeRegistry:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    return registry_from_dict(d)


def registry_to_yaml(registry: TypeRegistry) -> str:
    return yaml.safe_dump(registry_to_dict(registry), sort_keys=False)


def registry_from_yaml(s: str) -> TypeRegistry:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SerializationError(f"Invalid YAML: {e}") from e
    return registry_from_dict(d)


def namespaces_to_yaml(namespaces: Sequence[Namespace]) -> str:
    # Order matters to the abbreviation service, so keep it as given.
    return yaml.safe_dump(namespaces_to_dict(namespaces), sort_keys=False)


def namespaces_from_yaml(s: str) -> List[Namespace]:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SerializationError(f"Invalid YAML: {e}") from e
    return namespaces_from_dict(d)
