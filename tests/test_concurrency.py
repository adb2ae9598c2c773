"""
Concurrency tests for difusa.

Tests cover:
- Thread safety documentation verification
- Shared inputs and configs used from many threads
- Parallel sharded search
"""

import concurrent.futures
import threading

from fixtures.real_data import SERVICIOS, TERMINOS

import difusa as df
from difusa import batch


class TestThreadSafetyDocumentation:
    """Verify thread safety is documented."""

    def test_package_docstring(self):
        assert "thread" in (df.__doc__ or "").lower()

    def test_config_is_immutable(self):
        assert df.FuzzyConfig.__dataclass_params__.frozen


class TestSharedInputs:
    """The same records and config can be used from many threads at once."""

    def test_parallel_search_same_results(self):
        config = df.FuzzyConfig(threshold=0.6)
        expected = df.fuzzy_search("licensia", SERVICIOS, ["nombre", "descripcion"], config)

        def worker(_):
            return df.fuzzy_search("licensia", SERVICIOS, ["nombre", "descripcion"], config)

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(worker, range(32)))

        assert all(r == expected for r in results)

    def test_parallel_mixed_operations(self):
        errors = []
        barrier = threading.Barrier(4)

        def suggest():
            barrier.wait()
            for _ in range(20):
                assert df.generate_fuzzy_suggestions("lic", TERMINOS, 2) == [
                    "Licencia",
                    "Licencia de Construcción",
                ]

        def enhanced():
            barrier.wait()
            for _ in range(20):
                assert df.enhanced_search_suggestions("a", SERVICIOS, 5) == []

        def match():
            barrier.wait()
            for _ in range(20):
                assert df.fuzzy_match("tramite", "Trámite").score == 1.0

        def distance():
            barrier.wait()
            for _ in range(20):
                assert df.levenshtein_distance("kitten", "sitting") == 3

        def run(fn):
            try:
                fn()
            except AssertionError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=run, args=(fn,)) for fn in (suggest, enhanced, match, distance)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []

    def test_inputs_not_mutated(self):
        items = [dict(s) for s in SERVICIOS]
        snapshot = [dict(s) for s in items]

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(lambda q: df.enhanced_search_suggestions(q, items, 5), ["lic", "cert", "pago"]))

        assert items == snapshot


class TestParallelShardedSearch:
    """Sharded search on a thread pool matches the sequential search."""

    def test_many_workers(self):
        items = [{"nombre": f"Servicio {i}", "tags": ["servicio", f"codigo {i % 13}"]} for i in range(500)]
        expected = df.fuzzy_search("codigo 7", items, ["nombre", "tags"])
        actual = batch.sharded_search("codigo 7", items, ["nombre", "tags"], shard_size=16, max_workers=8)
        assert actual == expected

    def test_concurrent_sharded_calls(self):
        items = [{"nombre": f"Licencia {i}"} for i in range(200)]
        expected = df.fuzzy_search("licencia 1", items, ["nombre"])

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            futures = [
                executor.submit(batch.sharded_search, "licencia 1", items, ["nombre"], None, 25)
                for _ in range(8)
            ]
            results = [f.result() for f in futures]

        assert all(r == expected for r in results)
