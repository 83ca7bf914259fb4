from asa_service import create_app
from asa_service.config import Settings
from asa_service.rate_limit import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_window_slides():
    clock = FakeClock()
    limiter = RateLimiter(2, 60, clock=clock)
    assert limiter.hit("a") and limiter.hit("a")
    assert limiter.hit("a") is False
    assert limiter.hit("b") is True
    clock.now = 60
    assert limiter.hit("a") is True


def test_idle_clients_are_forgotten():
    clock = FakeClock()
    limiter = RateLimiter(5, 60, clock=clock)
    for client in ("a", "b", "c"):
        limiter.hit(client)
    assert limiter.tracked_clients() == 3
    clock.now = 30
    limiter.hit("a")
    assert limiter.tracked_clients() == 3
    clock.now = 61
    limiter.hit("d")
    # only "a" still has a request inside the window
    assert limiter.tracked_clients() == 2


def test_api_requests_limited_per_client():
    settings = Settings(
        environment="test",
        skip_database=True,
        log_file="",
        enable_rate_limiting=True,
        rate_limit_max_requests=2,
        rate_limit_window_ms=60_000,
    )
    client = create_app(settings).test_client()
    assert client.get("/api/maps").status_code == 200
    assert client.get("/api/creatures").status_code == 200
    resp = client.get("/api/maps")
    assert resp.status_code == 429
    assert resp.headers["Retry-After"] == "60"
    assert resp.get_json() == {"success": False, "error": "Too many requests from this IP, please try again later."}
    # health checks and non-API paths are never limited
    assert client.get("/api/health").status_code == 200
    assert client.get("/").status_code == 200
    other = client.get("/api/maps", environ_base={"REMOTE_ADDR": "10.0.0.9"})
    assert other.status_code == 200
