"""Package spec definition and validation.

This package provides:
1. Models — dataclasses for PackageSpec and its installation methods
2. Schema — JSON Schema for structural validation
3. Validator — fail-fast business-rule validation used by the generator
4. Rules — named, tunable heuristics applied during validation
"""

SCHEMA_VERSION = "1.0.0"
