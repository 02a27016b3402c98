"""Repo-root Uvicorn entrypoint.

Allows running the API from the repo root:

    uvicorn app.main:app --reload

This simply re-exports the FastAPI app built in `jobboard/app/main.py`.
"""

from jobboard.app.main import app  # re-export
