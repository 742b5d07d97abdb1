"""
REST API proxy for DART financial statements.

Forwards summary requests to the DART Open API and returns the raw line
items together with a condensed financial summary.
"""

__version__ = "1.0.0"
