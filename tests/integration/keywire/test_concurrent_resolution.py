"""Integration tests for resolving from several threads."""

import threading

from keywire import Container
from keywire.infrastructure.cache import InMemoryMetadataCache


class Config:
    pass


class Database:
    def __init__(self, config: Config):
        self.config = config


class Service:
    def __init__(self, db: Database, config: Config):
        self.db = db
        self.config = config


class TestConcurrentResolution:
    """Test read-only resolution from several threads."""

    def run_threads(self, target, count=8):
        threads = [threading.Thread(target=target) for _ in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    def test_concurrent_auto_wiring_with_shared_cache(self):
        """Test that concurrent resolutions all succeed with a shared cache."""
        container = Container(cache=InMemoryMetadataCache())
        results = []
        errors = []

        def worker():
            try:
                for _ in range(25):
                    results.append(container.get(Service))
            except Exception as e:  # pragma: no cover - reported below
                errors.append(e)

        self.run_threads(worker)

        assert errors == []
        assert len(results) == 200
        assert all(isinstance(service.db.config, Config) for service in results)

    def test_same_key_on_different_threads_is_not_a_cycle(self):
        """Test that resolution chains are per thread."""
        container = Container()
        started = threading.Event()
        release = threading.Event()
        calls = []

        def slow_factory():
            calls.append(1)
            if len(calls) == 1:
                started.set()
                release.wait(timeout=5)
            return Config()

        container.add("config", slow_factory)

        thread = threading.Thread(target=container.get, args=("config",))
        thread.start()
        started.wait(timeout=5)

        try:
            result = container.get("config")
        finally:
            release.set()
            thread.join()

        assert isinstance(result, Config)
        assert len(calls) == 2
