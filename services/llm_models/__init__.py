"""
LLM Pydantic Models

Structured output models for LLM operations.
"""

from .style_models import SlangCandidates

__all__ = [
    'SlangCandidates',
]
