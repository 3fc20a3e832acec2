"""
API Schemas - Pydantic models for request/response validation

These schemas define the wire contract between the API and clients.
Separate from the dataclasses used internally by the text pipeline.
"""
