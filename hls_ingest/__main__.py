"""Run the HTTP server: ``python -m hls_ingest``."""

import uvicorn

from hls_ingest.commons.settings.loader import get_settings


def main() -> None:
    """Serve the API with host, port and workers from server settings."""
    server = get_settings().server
    uvicorn.run(
        "hls_ingest.api.main:app",
        host=server.host,
        port=server.port,
        workers=server.workers,
        reload=server.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
