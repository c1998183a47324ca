#!/usr/bin/env python
"""Script to run the Taskboard API server."""
import uvicorn

from taskboard.config import Settings

if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run(
        "taskboard.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=True
    )
