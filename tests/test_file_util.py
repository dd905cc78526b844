"""Tests for collision-free output naming."""

import threading

from bandcompress.utils.file_util import OutputReservations, collision_name, resolve_output_path


class TestResolveOutputPath:
    """Destination naming against the filesystem."""

    def test_free_path_is_returned_unchanged(self, tmp_path):
        assert resolve_output_path(tmp_path, "Alpha 29092025") == tmp_path / "Alpha 29092025.mp4"

    def test_repeated_calls_return_same_path(self, tmp_path):
        (tmp_path / "clip.mp4").write_bytes(b"x")

        first = resolve_output_path(tmp_path, "clip")
        second = resolve_output_path(tmp_path, "clip")

        assert first == second == tmp_path / "clip (compressed).mp4"
        assert not first.exists()

    def test_numbering_continues_after_each_collision(self, tmp_path):
        (tmp_path / "clip.mp4").write_bytes(b"x")
        seen = set()
        for _ in range(4):
            candidate = resolve_output_path(tmp_path, "clip")
            assert not candidate.exists()
            assert candidate not in seen
            seen.add(candidate)
            candidate.write_bytes(b"x")

        assert {p.name for p in seen} == {
            "clip (compressed).mp4",
            "clip (compressed 2).mp4",
            "clip (compressed 3).mp4",
            "clip (compressed 4).mp4",
        }

    def test_taken_paths_count_as_used(self, tmp_path):
        taken = {tmp_path / "clip.mp4", tmp_path / "clip (compressed).mp4"}

        assert resolve_output_path(tmp_path, "clip", taken=taken) == tmp_path / "clip (compressed 2).mp4"

    def test_custom_extension(self, tmp_path):
        assert resolve_output_path(tmp_path, "clip", extension=".mkv").name == "clip.mkv"

    def test_collision_name(self):
        assert collision_name("clip", 1) == "clip (compressed)"
        assert collision_name("clip", 7) == "clip (compressed 7)"


class TestOutputReservations:
    """Claims shared between worker threads."""

    def test_claims_are_distinct(self, tmp_path):
        reservations = OutputReservations()

        first = reservations.claim(tmp_path, "clip")
        second = reservations.claim(tmp_path, "clip")

        assert first.name == "clip.mp4"
        assert second.name == "clip (compressed).mp4"

    def test_claims_from_threads_never_repeat(self, tmp_path):
        reservations = OutputReservations()
        results = []
        lock = threading.Lock()

        def _claim():
            path = reservations.claim(tmp_path, "clip")
            with lock:
                results.append(path)

        threads = [threading.Thread(target=_claim) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 8

    def test_claim_exact(self, tmp_path):
        reservations = OutputReservations()
        target = tmp_path / "clip.mp4"

        assert reservations.claim_exact(target) is True
        assert reservations.claim_exact(target) is False

        existing = tmp_path / "old.mp4"
        existing.write_bytes(b"x")
        assert reservations.claim_exact(existing) is False
