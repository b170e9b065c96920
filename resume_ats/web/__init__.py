"""FastAPI surface for Resume ATS."""
