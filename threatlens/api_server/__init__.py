"""
API server package — HTTP surface over the local scorers.

Serves the classification endpoints the analyzers call remotely, answered
by the local rule-based scorers of the configured profile.
"""
