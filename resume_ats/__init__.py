"""Resume ATS - résumé analysis, rewriting and export behind a small web API."""

__version__ = "0.1.0"
