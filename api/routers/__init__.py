"""
API Routers - HTTP endpoint handlers

- run: Validate input and run the parse/analyze/summarize pipeline
- health: Liveness probe
"""
