"""
mkpractice - Macedonian practice session and confidence engine.

Answer normalization, quick practice session logic, card building and
recency-weighted grammar topic confidence, shared by the web, mobile and
server clients.
"""

__version__ = "0.1.0"
