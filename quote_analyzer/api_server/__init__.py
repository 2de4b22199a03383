"""
API server package — HTTP/REST interface.

Exposes quote analysis, categories, health and stats under /quotes and
delegates to the quotes service.
"""
