"""
Style Translation Pydantic Models

Structured output models for the style transformation layers.
"""

from pydantic import BaseModel, Field
from typing import List


class SlangCandidates(BaseModel):
    """Alternative slang renderings of one input, later reranked by freshness.

    Example structure:
    {
        "candidates": [
            "gotta grind for my exam tmrw",
            "gotta lock in for the exam tmrw",
            "need to study for my exam tmrw fr"
        ]
    }
    """
    candidates: List[str] = Field(
        description="Up to 3 translation options, each preserving the exact original meaning",
        min_length=1,
        max_length=5
    )
