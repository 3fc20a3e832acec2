"""
API Services - Bridge between HTTP handlers and the core text pipeline
"""
