from .duckdb_store import ResolutionLedger

__all__ = ["ResolutionLedger"]
