"""
Core utilities — exceptions and cross-cutting concerns.

Shared by the AI service client, the quotes service and the API server.
"""
