import socket

import pytest

from happy.core.resolver import EndpointResolver


def fake_getaddrinfo(results: dict):
    def getaddrinfo(host, port, family=0, type=0, proto=0, flags=0):
        if host not in results:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        return results[host]

    return getaddrinfo


class TestEndpointResolver:
    @pytest.mark.asyncio
    async def test_resolves_literal_address(self):
        resolver = EndpointResolver(rounds=4)

        target = await resolver.resolve("127.0.0.1", "8080")

        assert target.host == "127.0.0.1"
        assert target.port == "8080"
        assert target.active
        assert len(target.endpoints) >= 1

        endpoint = target.endpoints[0]
        assert endpoint.family == socket.AF_INET
        assert endpoint.socktype == socket.SOCK_STREAM
        assert endpoint.address == ("127.0.0.1", 8080)
        assert endpoint.capacity == 4
        assert endpoint.samples == []
        assert endpoint.in_flight is False

    @pytest.mark.asyncio
    async def test_one_endpoint_per_address(self, monkeypatch):
        monkeypatch.setattr(
            socket,
            "getaddrinfo",
            fake_getaddrinfo({
                "example.test": [
                    (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", ("192.0.2.1", 80)),
                    (socket.AF_INET6, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", ("2001:db8::1", 80, 0, 0)),
                ],
            }),
        )

        target = await EndpointResolver(rounds=3).resolve("example.test", "80")

        assert [endpoint.family for endpoint in target.endpoints] == [
            socket.AF_INET,
            socket.AF_INET6,
        ]
        assert target.endpoints[0].samples is not target.endpoints[1].samples

    @pytest.mark.asyncio
    async def test_failure_yields_inert_target(self, monkeypatch, capsys):
        monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo({}))

        target = await EndpointResolver().resolve("nonexistent.test", "80")

        assert target.host == "nonexistent.test"
        assert target.endpoints == []
        assert target.active is False

        captured = capsys.readouterr()
        assert "skipping nonexistent.test port 80" in captured.err
        assert captured.out == ""

    @pytest.mark.asyncio
    async def test_resolve_many_keeps_order(self, monkeypatch):
        monkeypatch.setattr(
            socket,
            "getaddrinfo",
            fake_getaddrinfo({
                "a.test": [
                    (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", ("192.0.2.1", 80)),
                ],
                "b.test": [
                    (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", ("192.0.2.2", 80)),
                ],
            }),
        )

        targets = await EndpointResolver().resolve_many([
            ("b.test", "80"),
            ("missing.test", "80"),
            ("a.test", "80"),
        ])

        assert [target.host for target in targets] == [
            "b.test",
            "missing.test",
            "a.test",
        ]
        assert [target.active for target in targets] == [True, False, True]
