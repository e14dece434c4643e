# FILE: signup_api/run.py
# Scop:
#   - Pornește API-ul cu Uvicorn pe HOST/PORT din .env.
#   - Folosit de unit-ul systemd (ExecStart=.../signup-api) sau direct: `signup-api`.
#
# Debug:
#   - Oprirea (SIGINT/SIGTERM) trece prin lifespan => pool-ul DB se închide curat.

from uvicorn import Config, Server

from .config import settings


def main() -> None:
    config = Config(
        app="signup_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info" if settings.debug else "warning",
    )
    Server(config).run()


if __name__ == "__main__":
    main()
