"""
Quote Analyzer — REST façade for comparative vendor quote analysis.

Accepts a batch of vendor quotes, forwards them to the external AI analysis
service, applies deterministic business rules (score penalties, ranking)
and returns the enriched result. Stateless: nothing is persisted.
"""

__version__ = "0.1.0"
