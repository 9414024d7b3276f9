from happy.core.models import Target
from happy.core.registry import TargetRegistry


class TestTargetRegistry:
    def test_preserves_insertion_order(self, endpoint_factory):
        registry = TargetRegistry()
        names = ["c.test", "a.test", "b.test"]

        for name in names:
            registry.append(
                Target(host=name, port="80", endpoints=[endpoint_factory()])
            )

        assert [target.host for target in registry] == names
        assert len(registry) == 3
        assert registry[1].host == "a.test"

    def test_ignores_missing_targets(self):
        registry = TargetRegistry()
        registry.extend([None, Target(host="a.test", port="80"), None])

        assert len(registry) == 1

    def test_inert_targets_are_skipped(self, endpoint_factory):
        registry = TargetRegistry()
        registry.append(Target(host="unresolved.test", port="80"))
        registry.append(
            Target(host="a.test", port="80", endpoints=[endpoint_factory()])
        )

        assert len(registry) == 2
        assert [target.host for target in registry.active()] == ["a.test"]
        assert registry.has_endpoints

    def test_no_endpoints(self):
        registry = TargetRegistry()
        registry.append(Target(host="unresolved.test", port="80"))

        assert registry.has_endpoints is False
        assert list(registry.endpoints()) == []

    def test_in_flight(self, endpoint_factory, fake_socket_factory):
        first = endpoint_factory()
        second = endpoint_factory(address="127.0.0.2")
        second.launch(fake_socket_factory(), 0)

        registry = TargetRegistry()
        registry.append(Target(host="a.test", port="80", endpoints=[first, second]))

        assert registry.in_flight() == [second]
