"""
connectors — base contract for data-source connectors.

Provides:
  • ConnectorBase, the class every connector subclasses
  • ConnectorRegistry, loading connector modules and assigning ids
  • Run lifecycle helpers (run_started → steps → run_finished)
  • Passport strategy helpers for the built-in OAuth flow
"""
