"""
Tests for the Registry Analyzer.

Tests verify that the analyzer correctly:
    - Counts types per alias
    - Reports short-name collisions in namespace order
    - Detects types outside every namespace
    - Detects dangling references
"""

from nameabbrev.analyzer import analyze_registry
from nameabbrev.examples import PKG1, PKG2, build_example_registry, example_namespaces
from nameabbrev.model import Namespace, TypeDescriptor
from nameabbrev.registry import TypeRegistry
from nameabbrev.service import NameAbbrevService


def test_example_registry_report():
    report = analyze_registry(build_example_registry(), example_namespaces())

    assert report.total_types == 6
    assert report.total_namespaces == 3
    assert report.types_per_alias == {"ptk": 6}
    assert report.collisions == {"ClassB": [f"{PKG1}.ClassB", f"{PKG2}.ClassB"]}
    assert not report.unreachable_types
    assert not report.dangling_references
    assert len(report.warnings) == 1


def test_collision_owner_follows_namespace_order():
    registry = build_example_registry()
    first = analyze_registry(registry, example_namespaces(pkg1_first=True))
    second = analyze_registry(registry, example_namespaces(pkg1_first=False))

    assert first.short_name_owner("ClassB") == f"{PKG1}.ClassB"
    assert second.short_name_owner("ClassB") == f"{PKG2}.ClassB"


def test_owner_matches_service():
    """The reported owner is the type the service abbreviates to the short name."""
    registry = build_example_registry()
    namespaces = example_namespaces(pkg1_first=False)
    report = analyze_registry(registry, namespaces)
    service = NameAbbrevService(namespaces, registry=registry)

    owner = registry.get(report.short_name_owner("ClassB"))
    assert service.abbreviate(owner) == ("ClassB", "ptk")


def test_unreachable_types():
    """Types outside every namespace would fail strict abbreviation."""
    registry = TypeRegistry([TypeDescriptor(name="a.X"), TypeDescriptor(name="org.other.Y")])
    report = analyze_registry(registry, [Namespace("a", "a")])

    assert report.unreachable_types == {"org.other.Y"}
    assert report.types_per_alias == {"a": 1}
    assert any("outside every namespace" in w for w in report.warnings)


def test_builtin_namespace_counts():
    registry = TypeRegistry([TypeDescriptor(name="builtins.String")])
    report = analyze_registry(registry, [])
    assert report.types_per_alias == {"ptk": 1}


def test_dangling_references():
    registry = TypeRegistry([
        TypeDescriptor(name="a.Orphan", supertypes=("a.Missing", "int")),
        TypeDescriptor(name="a.Shape", is_interface=True, implementation="a.ShapeImpl"),
    ])
    report = analyze_registry(registry, [Namespace("a", "a")])

    assert report.dangling_references == {
        "a.Orphan": ["a.Missing"],
        "a.Shape": ["a.ShapeImpl"],
    }
    assert any("a.Missing" in w for w in report.warnings)


def test_interfaces_without_implementation():
    registry = TypeRegistry([TypeDescriptor(name="a.Shape", is_interface=True)])
    report = analyze_registry(registry, [Namespace("a", "a")])
    assert report.interfaces_without_implementation == {"a.Shape"}


def test_analyzer_does_not_warn_twice():
    report = analyze_registry(build_example_registry(), example_namespaces())
    report.add_warning(report.warnings[0])
    assert len(report.warnings) == 1
