import uvicorn

from sesame.core.config import get_settings
from sesame.core.logging import configure_logging
from sesame.main import create_app


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
