"""
Vector database providers package.
"""

from .chroma_provider import ChromaProvider, parse_endpoint

__all__ = ["ChromaProvider", "parse_endpoint"]
