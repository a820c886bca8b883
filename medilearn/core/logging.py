import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once (called by create_app).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # create_app runs once per test client: never stack handlers
    if any(getattr(h, "_medilearn", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._medilearn = True  # type: ignore[attr-defined]
    root.addHandler(handler)
