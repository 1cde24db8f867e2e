# search/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def search_start(self, *, start, goal, timeout_s): ...
    def search_end(self, *, start, goal, result): ...
    def error(self, *, reason: str, **kw): ...
    def biz(self, ev): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def error(self, *_, **__):
        pass

    def biz(self, *_, **__):
        pass
