"""
Ironplan: strength program generation with injury-aware rehab rotation.
"""

__version__ = "0.1.0"
