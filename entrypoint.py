"""Backend entrypoint. Starts uvicorn with host and port from env."""
import os
import uvicorn

# Import app directly rather than by string so packaged builds resolve it
from tradesim.main import app


def main() -> None:
    host = os.environ.get("TRADESIM_HOST", "127.0.0.1")
    port = int(os.environ.get("TRADESIM_PORT", "8080"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
