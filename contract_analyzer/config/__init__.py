"""
Configuration for the contract analyzer.
"""

from contract_analyzer.config.settings import (
    AnalyzerSettings,
    load_settings,
    validate_settings,
    describe_settings,
)

__all__ = [
    "AnalyzerSettings",
    "load_settings",
    "validate_settings",
    "describe_settings",
]
