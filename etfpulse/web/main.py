"""
Web service launcher.
"""

import os

import uvicorn


def etfpulse_main() -> None:
    """Start the FastAPI service with uvicorn."""

    host = os.getenv("ETFPULSE_HOST", "0.0.0.0")
    port = int(os.getenv("ETFPULSE_PORT", "8000"))
    reload = os.getenv("ETFPULSE_RELOAD", "false").lower() == "true"

    uvicorn.run("etfpulse.web.app:app", host=host, port=port, reload=reload, log_level="info")


if __name__ == "__main__":
    etfpulse_main()
