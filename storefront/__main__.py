"""Run the API server: ``python -m storefront`` or the ``storefront`` script."""

import uvicorn

from storefront.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
