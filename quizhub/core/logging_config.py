import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger; safe to call twice."""
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(handler, "_quizhub", False) for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._quizhub = True
    root.addHandler(handler)
