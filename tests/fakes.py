import json
from types import SimpleNamespace

from klara.client import ApiClient
from klara.session import ActivityTracker, SessionKeepalive, SessionManager


BASE_URL = "http://api.test/api/v1"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK", raw=None):
        self.status_code = status_code
        self.reason = reason
        if raw is not None:
            self.content = raw.encode("utf-8")
        elif payload is None:
            self.content = b""
        else:
            self.content = json.dumps(payload).encode("utf-8")

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.content)


class FakeHttp:
    """Stands in for requests.Session; answers from a queue"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append(
            SimpleNamespace(method=method, url=url, json=json, headers=dict(headers or {}), timeout=timeout)
        )
        if not self.responses:
            raise AssertionError(f"unexpected request {method} {url}")
        return self.responses.pop(0)


class FakeScheduler:
    instances = []

    def __init__(self):
        self.jobs = []
        self.started = False
        self.shut_down = False
        FakeScheduler.instances.append(self)

    def add_job(self, func, trigger=None, args=None, id=None, **kwargs):
        self.jobs.append(SimpleNamespace(func=func, trigger=trigger, args=args or [], id=id, kwargs=kwargs))

    def start(self):
        self.started = True

    def shutdown(self, wait=True):
        self.shut_down = True


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class CountingTokenSource:
    """Token provider that hands out tok-1, tok-2, ..."""

    def __init__(self, tokens=None):
        self.tokens = list(tokens) if tokens is not None else None
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.tokens is not None:
            value = self.tokens.pop(0)
            if isinstance(value, Exception):
                raise value
            return value
        return f"tok-{self.calls}"


def make_session_manager(clock=None):
    activity = ActivityTracker(clock=clock or FakeClock())
    keepalive = SessionKeepalive(
        activity,
        interval_seconds=300,
        idle_seconds=600,
        scheduler_factory=FakeScheduler,
    )
    return SessionManager(activity=activity, keepalive=keepalive)


def make_client(responses=None, session_manager=None):
    http = FakeHttp(responses)
    sessions = session_manager or make_session_manager()
    client = ApiClient(base_url=BASE_URL, http=http, session_manager=sessions)
    return client, http, sessions
