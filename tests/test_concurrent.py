"""
Concurrency tests: many threads hitting one registry.
"""

from concurrent.futures import ThreadPoolExecutor
import threading

from shortcode_app.exceptions import DuplicateShortcodeError
from shortcode_app.models.url import CreationRequest
from shortcode_app.services.batch_processor import BatchProcessor
from shortcode_app.services.short_code_strategies import RandomShortCodeStrategy


class TestConcurrentInserts:
    def test_same_code_only_inserted_once(self, registry):
        """Concurrent inserts of one shortcode: exactly one wins"""
        barrier = threading.Barrier(16)

        def attempt(i):
            barrier.wait()
            try:
                registry.insert("race", f"https://example.com/{i}", 30)
                return True
            except DuplicateShortcodeError:
                return False

        with ThreadPoolExecutor(max_workers=16) as pool:
            outcomes = list(pool.map(attempt, range(16)))

        assert outcomes.count(True) == 1
        assert len(registry) == 1

    def test_parallel_batches_never_share_codes(self, registry, sink):
        """Generated codes from a tiny keyspace stay unique across threads"""
        # 2-char codes over 62 symbols: 3844 codes, so collisions really happen
        def run_batch(_):
            processor = BatchProcessor(
                registry,
                generator=RandomShortCodeStrategy(length=2),
                events=sink,
                max_attempts=5000,
            )
            requests = [CreationRequest(long_url="https://example.com") for _ in range(50)]
            return processor.process(requests)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(run_batch, range(8)))

        codes = [r.shortcode for result in results for r in result.succeeded]
        assert len(codes) == 400
        assert len(set(codes)) == 400
        assert len(registry) == 400

    def test_clicks_from_many_threads_all_recorded(self, registry, recorder):
        registry.insert("hot", "https://example.com", 30)

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(lambda _: recorder.record_access("hot"), range(200)))

        assert all(outcomes)
        assert registry.lookup("hot").click_count == 200

    def test_reads_see_whole_records(self, registry, recorder):
        """list_all during clicks never sees a half-appended record"""
        registry.insert("hot", "https://example.com", 30)
        stop = threading.Event()
        seen_counts = []
        torn = []

        def reader():
            while not stop.is_set():
                for record in registry.list_all():
                    seen_counts.append(record.click_count)
                    if len({c.id for c in record.clicks}) != record.click_count:
                        torn.append(record)

        thread = threading.Thread(target=reader)
        thread.start()
        for _ in range(100):
            recorder.record_access("hot")
        stop.set()
        thread.join()

        assert torn == []
        assert seen_counts == sorted(seen_counts)
