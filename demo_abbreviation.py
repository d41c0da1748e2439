#!/usr/bin/env python3
"""
Demo: Abbreviate and resolve types from two colliding packages.

Runs the same registry under both namespace orders to show which ClassB
receives the bare short name.
"""

from nameabbrev import NameAbbrevService
from nameabbrev.analyzer import analyze_registry
from nameabbrev.examples import PKG1, PKG2, build_example_registry, example_namespaces


def main():
    registry = build_example_registry()
    names = [f"{PKG1}.ClassA", f"{PKG1}.ClassB", f"{PKG2}.ClassB", f"{PKG2}.ClassC", f"{PKG1}.NodeImpl"]

    for pkg1_first in (True, False):
        namespaces = example_namespaces(pkg1_first=pkg1_first)
        service = NameAbbrevService(namespaces, registry=registry)

        print("=" * 80)
        print("ORDER: " + ", ".join(ns.prefix for ns in namespaces))
        print("=" * 80)

        for name in names:
            short_form, alias = service.abbreviate(registry.get(name))
            resolved = service.resolve(short_form)
            print(f"{name:32} -> {alias}:{short_form:28} -> {resolved}")

        report = analyze_registry(registry, namespaces)
        for warning in report.warnings:
            print(f"  ! {warning}")
        print()

    print("Used prefixes:", dict(service.get_used_prefixes()))


if __name__ == "__main__":
    main()
