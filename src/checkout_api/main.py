from __future__ import annotations

import uvicorn

from checkout_api.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "checkout_api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
