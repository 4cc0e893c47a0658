"""HTTP server entry point.

Invoked as:  python -m gifvote

Configures structured JSON logging and serves the application factory with
uvicorn. Schema migration happens in the application lifespan, before the
port is bound; a failed migration ends the process with nothing listening.
"""

import uvicorn

from gifvote.api.main import configure_logging
from gifvote.config import constants


def main() -> None:
    configure_logging()

    uvicorn.run(
        "gifvote.api.main:create_app",
        factory=True,
        host=constants.HOST,
        port=constants.PORT,
        # Keep uvicorn on the stdlib root logger configured above.
        log_config=None,
    )


if __name__ == "__main__":
    main()
