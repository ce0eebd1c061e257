"""Run the API server: python -m matchcast"""

import uvicorn

from matchcast.config import Config


def main() -> None:
    uvicorn.run(
        "matchcast.api.app:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
