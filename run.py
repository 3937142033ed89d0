"""
run.py

Starts the schema builder API with Uvicorn:
    python run.py

Host, port and auto-reload come from the environment (see config.py).
"""

import uvicorn

from docschema.config import APP_HOST, APP_PORT, APP_RELOAD


if __name__ == "__main__":
    uvicorn.run(
        "docschema.main:app",
        host=APP_HOST,
        port=APP_PORT,
        reload=APP_RELOAD
    )
