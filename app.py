import logging

from studio_relay import create_app
from studio_relay.config import load_settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()


def main() -> None:
    port = load_settings().port
    app.logger.info("Master Server Online on %s", port)
    app.run(host="0.0.0.0", port=port, threaded=True)


# Local dev convenience
if __name__ == "__main__":
    main()
