"""Helper modules for PrintMe Web (pure computations, no storage)."""

__all__ = [
    "advisor",
    "document_analyzer",
    "estimator",
    "geo",
]
