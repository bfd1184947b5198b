"""
CLI for the contract analyzer: results rendering, health check, commands.
"""

from contract_analyzer.cli.report import render_analysis, render_failure, SECTION_TITLES
from contract_analyzer.cli.healthcheck import SystemHealthCheck, run_healthcheck

__all__ = [
    "render_analysis",
    "render_failure",
    "SECTION_TITLES",
    "SystemHealthCheck",
    "run_healthcheck",
]
