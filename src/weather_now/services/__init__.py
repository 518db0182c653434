"""
Shared utilities.

- http.py - requests session with default timeout, single attempt per request
"""
