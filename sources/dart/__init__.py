"""
DART financial statement source.

Validates summary requests, fetches single-company financial statements
from the DART Open API and condenses them into a financial summary.
"""
