"""Graph domain: element names, dependency types, graph builder, pattern matcher."""

from depanalyzer.graph.builder import DependencyGraphBuilder
from depanalyzer.graph.dependency_graph import DependencyArrow, DependencyGraph
from depanalyzer.graph.dependency_types import (
    ConstantFetch,
    DependencyType,
    Generic,
    MethodCall,
    NewObject,
    PropertyFetch,
    dependency_type_from_dict,
    dependency_type_to_dict,
)
from depanalyzer.graph.fqsen import (
    FQSEN,
    ClassConstantFQSEN,
    ClassFQSEN,
    FunctionFQSEN,
    MethodFQSEN,
    PropertyFQSEN,
)
from depanalyzer.graph.pattern_matcher import (
    PHP_NATIVE_CLASSES,
    StructuralElementPatternMatcher,
)

__all__ = [
    "FQSEN",
    "PHP_NATIVE_CLASSES",
    "ClassConstantFQSEN",
    "ClassFQSEN",
    "ConstantFetch",
    "DependencyArrow",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DependencyType",
    "FunctionFQSEN",
    "Generic",
    "MethodCall",
    "MethodFQSEN",
    "NewObject",
    "PropertyFQSEN",
    "PropertyFetch",
    "StructuralElementPatternMatcher",
    "dependency_type_from_dict",
    "dependency_type_to_dict",
]
