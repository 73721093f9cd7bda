import json, logging, os, sys, time, socket

from concurrent_log_handler import ConcurrentRotatingFileHandler

# LogRecord attributes that are not user "extra" fields
_RESERVED = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs", "message", "msg", "name",
    "pathname", "process", "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
}


# ---------- Formatters ----------
class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras, traceback."""
    def __init__(self, *, extra_static=None):
        super().__init__()
        self.extra_static = extra_static or {}

    def format(self, record: logging.LogRecord) -> str:
        doc = {
            "ts": time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "thread": record.threadName,
        }
        for k, v in record.__dict__.items():
            if k not in doc and k not in _RESERVED and not k.startswith("_"):
                doc[k] = v
        doc.update(self.extra_static)
        if record.exc_info:
            doc["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(doc, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__("%(asctime)s [%(threadName)-12.12s] [%(levelname)-8.8s] "
                         "[%(name)s] %(message)s")


def _parse_level(val: str | int | None, default: str = "INFO") -> int:
    if isinstance(val, int):
        return val
    s = (val or os.getenv("LOG_LEVEL", default)).upper()
    return getattr(logging, s, logging.INFO)


def setup_logging(
    *,
    app: str,
    level: str | int | None = None,
    stream_json: bool = True,
    filename: str | None = None,
    rolling_max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Route the root logger to stdout (JSON or text) and, when ``filename`` is
    set, to a process-safe rotating file in text form.
    Call once at process start; calling again replaces the handlers.
    """
    lvl = _parse_level(level)
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(lvl)

    sh = logging.StreamHandler(sys.stdout)
    sh.setLevel(lvl)
    if stream_json:
        sh.setFormatter(JsonFormatter(extra_static={"app": app, "host": socket.gethostname()}))
    else:
        sh.setFormatter(TextFormatter())
    root.addHandler(sh)

    if filename:
        d = os.path.dirname(filename)
        if d:
            os.makedirs(d, exist_ok=True)
        fh = ConcurrentRotatingFileHandler(filename=filename, maxBytes=rolling_max_bytes, backupCount=backup_count)
        fh.setLevel(lvl)
        fh.setFormatter(TextFormatter())
        root.addHandler(fh)

    return root
