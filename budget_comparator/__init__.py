"""
Budget Comparator - year-over-year variance of Consulta Amigable reports.

Architecture:
- core/: Stable foundation (models, errors, HTTP client, normalizer, differ)
- parsers/: Extraction strategies (data table)
- config/: YAML-driven settings
- api/: FastAPI HTTP layer
- orchestrator: Per-request comparison service
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
