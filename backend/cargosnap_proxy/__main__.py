"""Runs the proxy with uvicorn: `python -m cargosnap_proxy`."""

import uvicorn

from cargosnap_proxy.config import settings


def main() -> None:
    uvicorn.run(
        "cargosnap_proxy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
