"""
Models package for NewsCat Gateway

Contains data models organized by domain:
- api: response envelopes returned by the FastAPI routes
"""
