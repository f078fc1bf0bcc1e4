"""Detector domain: components, dependency rules, rule factory, violation detector."""

from depanalyzer.detector.component import Component
from depanalyzer.detector.rule import DependencyRule, Violation
from depanalyzer.detector.rule_factory import DependencyRuleFactory
from depanalyzer.detector.violation_detector import RuleViolationDetector

__all__ = [
    "Component",
    "DependencyRule",
    "DependencyRuleFactory",
    "RuleViolationDetector",
    "Violation",
]
