"""Core data model, detection and validation modules.

WHY: The core package holds the stable contract of the parser - the IR
dataclasses, the format detector and the Structural Validator. Extractors
and transforms depend on it; it depends on neither.

HOW: ir.py defines the data structures, text.py counts graphemes,
detect.py classifies sources, validator.py enforces the invariants.

RULES:
- IR dataclasses are the contract - change with care
- Nothing in core imports from extractors or transforms
"""
