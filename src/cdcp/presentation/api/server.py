"""Run the API with uvicorn."""

import uvicorn

from cdcp_config.settings import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "cdcp.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )


if __name__ == "__main__":
    run()
