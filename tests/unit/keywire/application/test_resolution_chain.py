"""Unit tests for ResolutionChain."""

import threading

import pytest

from keywire.application.resolution_chain import ResolutionChain
from keywire.domain import CycleError


class TestResolutionChain:
    """Test cases for ResolutionChain."""

    def test_chain_created_lazily(self):
        """Test that no chain exists before first use."""
        chain = ResolutionChain()

        assert not hasattr(chain._local, "chain")

    def test_push_and_snapshot(self):
        """Test that keys are recorded in order."""
        chain = ResolutionChain()

        chain.push("app.A")
        chain.push("app.B")

        assert chain.snapshot() == ["app.A", "app.B"]

    def test_pop_removes_most_recent(self):
        """Test that pop removes the last pushed key."""
        chain = ResolutionChain()
        chain.push("app.A")
        chain.push("app.B")

        chain.pop()

        assert chain.snapshot() == ["app.A"]

    def test_pop_on_empty_chain(self):
        """Test that pop on an empty chain is harmless."""
        chain = ResolutionChain()

        chain.pop()

        assert chain.snapshot() == []

    def test_direct_cycle(self):
        """Test that pushing the same key twice raises CycleError."""
        chain = ResolutionChain()
        chain.push("app.A")

        with pytest.raises(CycleError) as exc_info:
            chain.push("app.A")

        assert exc_info.value.chain == ["app.A", "app.A"]

    def test_transitive_cycle_starts_at_first_occurrence(self):
        """Test that the reported cycle starts where the key first appeared."""
        chain = ResolutionChain()
        chain.push("app.Root")
        chain.push("app.A")
        chain.push("app.B")

        with pytest.raises(CycleError) as exc_info:
            chain.push("app.A")

        assert exc_info.value.chain == ["app.A", "app.B", "app.A"]

    def test_failed_push_leaves_chain_unchanged(self):
        """Test that a detected cycle does not modify the chain."""
        chain = ResolutionChain()
        chain.push("app.A")

        with pytest.raises(CycleError):
            chain.push("app.A")

        assert chain.snapshot() == ["app.A"]

    def test_clear(self):
        """Test that clear empties the chain."""
        chain = ResolutionChain()
        chain.push("app.A")

        chain.clear()

        assert chain.snapshot() == []

    def test_chains_are_thread_local(self):
        """Test that each thread has its own chain."""
        chain = ResolutionChain()
        chain.push("app.A")
        seen = []

        def worker():
            seen.append(chain.snapshot())
            chain.push("app.A")
            seen.append(chain.snapshot())

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert seen == [[], ["app.A"]]
        assert chain.snapshot() == ["app.A"]
