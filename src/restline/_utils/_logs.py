import logging
import sys

logger = logging.getLogger("restline")


def setup_logging(debug: bool = False) -> None:
    """Attach a stderr handler to the ``restline`` logger.

    Calling it again only updates the level.
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if any(getattr(h, "_restline", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handler._restline = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
