"""Weekly attendance period engine.

Feature modules (periods, records, workers, hierarchy, monitoring) follow the
same split: frozen dataclass models, Protocol repositories with MySQL and
in-memory implementations, use-case services and thin Flask controllers.
"""
from __future__ import annotations

__version__ = "1.0.0"
