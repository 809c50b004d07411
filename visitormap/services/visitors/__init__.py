from .service import VisitorTracker, create_reader

__all__ = ["VisitorTracker", "create_reader"]
