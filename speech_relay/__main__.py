"""Run the relay with uvicorn: ``python -m speech_relay``."""
import uvicorn

from speech_relay.config.settings import settings


def main():
    uvicorn.run(
        "speech_relay.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
