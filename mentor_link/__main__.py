"""Run the Mentor-Link server with ``python -m mentor_link``."""

import uvicorn

from mentor_link.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "mentor_link.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
