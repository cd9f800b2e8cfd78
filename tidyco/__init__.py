"""TidyCo desk package entry.

Provides a stable module entrypoint (python -m tidyco) while the desk code
lives in the top-level packages (app/, core/, screens/, storage/, ui/, infra/).
"""

from app.version import __version__

__all__ = ["__version__"]
