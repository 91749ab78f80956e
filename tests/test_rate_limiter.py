"""Tests for FormRateLimiter and client address resolution"""

from aiohttp.test_utils import make_mocked_request

from adapters.api.middleware import FormRateLimiter, client_ip


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def request_from(remote, forwarded=None):
    headers = {"X-Forwarded-For": forwarded} if forwarded else {}
    return make_mocked_request("POST", "/api/feedback", headers=headers).clone(remote=remote)


class TestFormRateLimiter:

    def setup_method(self):
        self.clock = FakeClock()
        self.limiter = FormRateLimiter(limit=3, window=60, clock=self.clock)

    def test_allows_up_to_limit(self):
        for _ in range(3):
            assert self.limiter.check("1.2.3.4", "waiver") is None
        assert self.limiter.check("1.2.3.4", "waiver") == 60

    def test_retry_after_counts_down(self):
        for _ in range(3):
            self.limiter.check("1.2.3.4", "waiver")
            self.clock.now += 10
        # oldest hit at t=0, now t=30
        assert self.limiter.check("1.2.3.4", "waiver") == 30

    def test_window_slides(self):
        for _ in range(3):
            self.limiter.check("1.2.3.4", "feedback")
        self.clock.now = 61
        assert self.limiter.check("1.2.3.4", "feedback") is None

    def test_rejected_attempts_do_not_extend_block(self):
        for _ in range(3):
            self.limiter.check("ip", "feedback")
        for _ in range(5):
            assert self.limiter.check("ip", "feedback") is not None
        self.clock.now = 61
        assert self.limiter.check("ip", "feedback") is None

    def test_keys_are_per_ip_and_action(self):
        for _ in range(3):
            self.limiter.check("ip-a", "registration")
        assert self.limiter.check("ip-b", "registration") is None
        assert self.limiter.check("ip-a", "substitute") is None

    def test_stale_keys_are_dropped(self):
        for i in range(50):
            self.limiter.check(f"10.0.0.{i}", "feedback")
        self.clock.now = 30
        self.limiter.check("10.0.1.1", "feedback")
        assert len(self.limiter._hits) == 51

        self.clock.now = 61
        self.limiter.check("10.0.1.2", "feedback")
        assert set(self.limiter._hits) == {"feedback:10.0.1.1", "feedback:10.0.1.2"}


class TestClientIp:

    def test_header_ignored_from_untrusted_peer(self):
        request = request_from("192.0.2.10", forwarded="10.0.0.1")
        assert client_ip(request) == "192.0.2.10"
        assert client_ip(request, ["172.16.0.1"]) == "192.0.2.10"

    def test_trusted_proxy_uses_rightmost_untrusted_hop(self):
        request = request_from("172.16.0.1", forwarded="1.1.1.1, 198.51.100.4, 172.16.0.2")
        assert client_ip(request, ["172.16.0.1", "172.16.0.2"]) == "198.51.100.4"

    def test_trusted_proxy_without_header(self):
        assert client_ip(request_from("172.16.0.1"), ["172.16.0.1"]) == "172.16.0.1"

    def test_limiter_resolves_with_its_proxies(self):
        limiter = FormRateLimiter(trusted_proxies=["172.16.0.1"])
        assert limiter.client_ip(request_from("172.16.0.1", forwarded="203.0.113.9")) == "203.0.113.9"
