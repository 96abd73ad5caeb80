"""Run the API with uvicorn: ``python -m exercise_tracker``."""

import uvicorn

from exercise_tracker.config import settings


def main() -> None:
    uvicorn.run(
        "exercise_tracker.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
