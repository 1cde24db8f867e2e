# io/search_logging.py
import json
import logging
import sys

from street_route.io.recorder import Recorder
from street_route.search.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="street_route", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured logs for searches plus the analytics stream.
    Solved and unsolvable searches log at INFO, timeouts at WARNING.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level="DEBUG" if debug else level)
        self.searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # search lifecycle

    def search_start(self, *, start, goal, timeout_s):
        self.searches += 1
        if self.debug:
            self._emit("DEBUG", "search_start", start=start, goal=goal, timeout_s=timeout_s)

    def search_end(self, *, start, goal, result):
        outcome = result.outcome.value
        level = "WARNING" if outcome == "timeout" else "INFO"
        self._emit(
            level,
            "search_end",
            start=start,
            goal=goal,
            outcome=outcome,
            weight=result.solution_weight,
            states_explored=result.num_states_explored,
            elapsed_s=result.exploration_time_s,
        )

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "search_error", reason=reason, **kw)

    # ------------- Business Event Reporting --------------------------

    def biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)
