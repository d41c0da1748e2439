"""
Registry Analyzer: early diagnostics of a registry against a namespace order.

Reports, without building a service:
    - How many types each alias covers
    - Simple-name collisions and which type receives the bare short name
    - Types outside every namespace (strict abbreviate() would reject them)
    - Supertype and pairing references to unregistered types

IMPORTANT: This is read-only. It never touches a service cache.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from nameabbrev.model import BUILTIN_NAMESPACE, Namespace
from nameabbrev.registry import TypeRegistry


@dataclass
class RegistryReport:
    """Analysis report for a registry under one namespace order."""

    total_types: int = 0
    total_namespaces: int = 0

    types_per_alias: Dict[str, int] = field(default_factory=dict)

    # simple name -> identifiers in namespace order; the first one wins
    collisions: Dict[str, List[str]] = field(default_factory=dict)

    unreachable_types: Set[str] = field(default_factory=set)
    dangling_references: Dict[str, List[str]] = field(default_factory=dict)
    interfaces_without_implementation: Set[str] = field(default_factory=set)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    def short_name_owner(self, simple_name: str) -> str:
        """Identifier that gets the bare short name for a colliding name."""
        return self.collisions[simple_name][0]


def analyze_registry(registry: TypeRegistry, namespaces: Iterable[Namespace]) -> RegistryReport:
    """
    Analyze `registry` as a service built with `namespaces` would see it.

    The built-in namespace is prepended exactly like the service does.
    """
    ordered = [BUILTIN_NAMESPACE] + list(namespaces)
    report = RegistryReport(total_types=len(registry), total_namespaces=len(ordered))

    by_prefix: Dict[str, Namespace] = {}
    for ns in ordered:
        by_prefix.setdefault(ns.prefix, ns)

    # =========================================================================
    # 1. NAMESPACE COVERAGE
    # =========================================================================

    per_alias: Dict[str, int] = defaultdict(int)
    by_simple_name: Dict[str, List[str]] = defaultdict(list)

    for descriptor in registry:
        ns = by_prefix.get(descriptor.namespace)
        if ns is None:
            report.unreachable_types.add(descriptor.name)
            continue
        per_alias[ns.alias] += 1

    report.types_per_alias = dict(per_alias)

    # =========================================================================
    # 2. SHORT-NAME COLLISIONS
    # =========================================================================

    for ns in ordered:
        for descriptor in registry:
            if descriptor.namespace == ns.prefix and descriptor.name not in by_simple_name[descriptor.simple_name]:
                by_simple_name[descriptor.simple_name].append(descriptor.name)

    report.collisions = {
        name: owners for name, owners in by_simple_name.items() if len(owners) > 1
    }

    # =========================================================================
    # 3. REFERENCES
    # =========================================================================

    for descriptor in registry:
        missing = [s for s in descriptor.supertypes if s not in registry]
        for link in (descriptor.implementation, descriptor.interface):
            if link is not None and link not in registry:
                missing.append(link)
        if missing:
            report.dangling_references[descriptor.name] = missing
        if descriptor.is_interface and descriptor.implementation is None:
            report.interfaces_without_implementation.add(descriptor.name)

    # =========================================================================
    # 4. WARNINGS
    # =========================================================================

    for name, owners in sorted(report.collisions.items()):
        report.add_warning(
            f"Short name '{name}' is shared by {len(owners)} types; "
            f"only {owners[0]} abbreviates to it, the rest use qualified names"
        )
    if report.unreachable_types:
        report.add_warning(
            f"{len(report.unreachable_types)} type(s) are outside every namespace "
            "and cannot be abbreviated in strict mode"
        )
    for name, missing in sorted(report.dangling_references.items()):
        report.add_warning(f"{name} references unregistered type(s): {', '.join(missing)}")

    return report
