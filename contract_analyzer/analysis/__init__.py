"""
Analysis module - the remote analysis service client and its result model.

Usage:
    from contract_analyzer.analysis import AnalysisClient

    async with AnalysisClient("http://localhost:3000/upload") as client:
        result = await client.analyze(pdf_bytes, "contract.pdf")
        print(result.suggestions)
"""

from .models import (
    KeyValueItem,
    PartnerRelationship,
    Opportunity,
    AnalysisResult,
)

from .decoder import decode_analysis_result

from .client import AnalysisClient


__all__ = [
    # Models
    "KeyValueItem",
    "PartnerRelationship",
    "Opportunity",
    "AnalysisResult",

    # Decoding
    "decode_analysis_result",

    # Client
    "AnalysisClient",
]
