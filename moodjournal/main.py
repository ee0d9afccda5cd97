from __future__ import annotations

import os

import uvicorn

from moodjournal.app.main import app


def run() -> None:
    """Serve the API with uvicorn; logging stays with the app's JSON handlers."""

    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "0.0.0.0")
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
