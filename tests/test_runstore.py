"""Tests for the run store: manifest integrity, sample chunks, diff."""

import json
from datetime import datetime, timezone

import numpy as np

from orbit_rng.core.config import SequenceConfig
from orbit_rng.core.sequences import integer_sequence
from orbit_rng.runstore.diff import config_diff, first_divergence, format_diff, metric_diff
from orbit_rng.runstore.manifest import (
    RunManifest,
    compute_config_hash,
    compute_file_hash,
    derive_run_id,
    generator_parameters,
    verify_artifacts,
)
from orbit_rng.runstore.samples import SampleWriter, chunk_files, load_samples
from orbit_rng.runstore.writer import store_run, write_json


def _write_samples(run_dir, values):
    with SampleWriter(run_dir) as sw:
        sw.extend(values)
    return sw


class TestManifest:
    def test_run_id_deterministic(self):
        gen = generator_parameters("float")
        id1 = derive_run_id("abc", gen)
        id2 = derive_run_id("abc", gen)
        assert id1 == id2
        assert len(id1) == 12

    def test_run_id_tracks_config(self):
        gen = generator_parameters("int")
        assert derive_run_id("abc", gen) != derive_run_id("abd", gen)

    def test_run_id_tracks_recurrence_constants(self):
        gen = generator_parameters("int")
        altered = dict(gen, recurrences=[[16807, 2147483647]])
        assert derive_run_id("abc", gen) != derive_run_id("abc", altered)

    def test_generator_parameters(self):
        assert generator_parameters("int")["recurrences"] == [[16807, 214748364]]
        triple = generator_parameters("float")
        assert triple["recurrences"] == [[171, 30269], [172, 30307], [170, 30323]]
        assert triple["warmup"] == 5
        assert triple["combine"] == "fractional_sum"

    def test_config_hash_order_independent(self):
        h1 = compute_config_hash({"n": 1, "seed": 2})
        h2 = compute_config_hash({"seed": 2, "n": 1})
        assert h1 == h2

    def test_manifest_roundtrip(self):
        m = RunManifest(run_id="abc123", n_samples=3, head=[8, 7, 6], chunks=["samples.ndjson"])
        m2 = RunManifest.from_dict(m.to_dict())
        assert m2 == m

    def test_file_hash(self, tmp_path):
        f = tmp_path / "test.txt"
        f.write_text("hello world")
        assert compute_file_hash(f) == compute_file_hash(f)
        assert len(compute_file_hash(f)) == 64


class TestWriteJson:
    def test_write(self, tmp_path):
        p = tmp_path / "test.json"
        write_json(p, {"seed": 8})
        assert json.loads(p.read_text()) == {"seed": 8}

    def test_overwrites_without_leftovers(self, tmp_path):
        p = tmp_path / "test.json"
        write_json(p, {"n": 1})
        write_json(p, {"n": 2})
        assert json.loads(p.read_text()) == {"n": 2}
        assert not list(tmp_path.glob("*.tmp"))

    def test_creates_parent_dirs(self, tmp_path):
        p = tmp_path / "a" / "b" / "test.json"
        write_json(p, {})
        assert p.exists()


class TestSampleWriter:
    def test_basic_write(self, tmp_path):
        _write_samples(tmp_path, [0.25, 0.5])
        lines = (tmp_path / "samples.ndjson").read_text().strip().split("\n")
        assert [json.loads(line) for line in lines] == [
            {"i": 0, "value": 0.25},
            {"i": 1, "value": 0.5},
        ]

    def test_chunk_rollover(self, tmp_path):
        with SampleWriter(tmp_path, chunk_size=5) as sw:
            sw.extend(range(12))
        assert (tmp_path / "samples_0001.ndjson").exists()
        assert (tmp_path / "samples_0002.ndjson").exists()
        assert len(sw.chunk_paths) == 3
        assert load_samples(tmp_path).tolist() == list(range(12))

    def test_numpy_values(self, tmp_path):
        _write_samples(tmp_path, np.array([123092948, 28845728], dtype=np.int64))
        _write_samples(tmp_path / "f", np.array([0.1, 0.7]))
        assert load_samples(tmp_path).tolist() == [123092948, 28845728]
        assert load_samples(tmp_path / "f").tolist() == [0.1, 0.7]

    def test_floats_roundtrip_exactly(self, tmp_path):
        values = np.array([1 / 3, 2 / 7, 0.1 + 0.2])
        _write_samples(tmp_path, values)
        np.testing.assert_array_equal(load_samples(tmp_path), values)

    def test_reopen_removes_stale_chunks(self, tmp_path):
        with SampleWriter(tmp_path, chunk_size=5) as sw:
            sw.extend(range(23))
        assert len(chunk_files(tmp_path)) == 5

        with SampleWriter(tmp_path, chunk_size=5) as sw:
            sw.extend([7, 8])
        assert chunk_files(tmp_path) == [tmp_path / "samples.ndjson"]
        assert load_samples(tmp_path).tolist() == [7, 8]


class TestStoreRun:
    def test_bundle_complete(self, tmp_path):
        config = SequenceConfig(kind="int", n=3, seed=8)
        values = integer_sequence(3, 8)

        manifest = store_run(
            run_dir=tmp_path,
            config=config,
            values=values,
            summary={"mean": 0.2},
            started_at=datetime.now(timezone.utc),
        )

        for name in ["config.json", "summary.json", "samples.ndjson", "manifest.json"]:
            assert (tmp_path / name).exists()
        m = RunManifest.load(tmp_path)
        assert m.run_id == manifest.run_id
        assert m.n_samples == 3
        assert m.head == [123092948, 28845728, 98310392]
        assert m.chunks == ["samples.ndjson"]
        assert m.generator == generator_parameters("int")
        assert m.artifacts["samples.ndjson"] == compute_file_hash(tmp_path / "samples.ndjson")
        assert load_samples(tmp_path).tolist() == values.tolist()

    def test_chunks_listed_and_hashed(self, tmp_path):
        values = integer_sequence(12, 3)
        m = store_run(
            tmp_path, SequenceConfig(kind="int", n=12, seed=3), values, {},
            datetime.now(timezone.utc), chunk_size=5,
        )
        assert m.chunks == ["samples.ndjson", "samples_0001.ndjson", "samples_0002.ndjson"]
        assert set(m.chunks) <= set(m.artifacts)

    def test_shorter_rerun_replaces_samples(self, tmp_path):
        started = datetime.now(timezone.utc)
        long = integer_sequence(40, 5)
        store_run(tmp_path, SequenceConfig(kind="int", n=40, seed=5), long, {}, started, chunk_size=10)
        short = integer_sequence(4, 5)
        m = store_run(tmp_path, SequenceConfig(kind="int", n=4, seed=5), short, {}, started, chunk_size=10)

        assert load_samples(tmp_path).tolist() == short.tolist()
        assert chunk_files(tmp_path) == [tmp_path / c for c in m.chunks]
        assert verify_artifacts(tmp_path) == []

    def test_verify_detects_tampering(self, tmp_path):
        store_run(tmp_path, SequenceConfig(n=1), np.array([0.1]), {}, datetime.now(timezone.utc))
        assert verify_artifacts(tmp_path) == []

        (tmp_path / "samples.ndjson").write_text('{"i": 0, "value": 0.2}\n')
        assert verify_artifacts(tmp_path) == ["samples.ndjson"]


class TestDiff:
    def test_config_diff(self, tmp_path):
        dir_a, dir_b = tmp_path / "a", tmp_path / "b"
        dir_a.mkdir()
        dir_b.mkdir()
        (dir_a / "config.json").write_text(json.dumps({"seed": 42, "n": 100}))
        (dir_b / "config.json").write_text(json.dumps({"seed": 43, "n": 100}))

        diff = config_diff(dir_a, dir_b)
        assert diff == {"seed": (42, 43)}

    def test_metric_diff_ignores_run_id(self, tmp_path):
        dir_a, dir_b = tmp_path / "a", tmp_path / "b"
        dir_a.mkdir()
        dir_b.mkdir()
        (dir_a / "summary.json").write_text(json.dumps({"run_id": "x", "ks": 0.1}))
        (dir_b / "summary.json").write_text(json.dumps({"run_id": "y", "ks": 0.1}))
        assert metric_diff(dir_a, dir_b) == {}

    def test_first_divergence(self, tmp_path):
        _write_samples(tmp_path / "a", [1, 2, 3])
        _write_samples(tmp_path / "b", [1, 5, 3])
        _write_samples(tmp_path / "c", [1, 2])
        _write_samples(tmp_path / "d", [1, 2, 3])
        assert first_divergence(tmp_path / "a", tmp_path / "b") == 1
        assert first_divergence(tmp_path / "a", tmp_path / "c") == 2
        assert first_divergence(tmp_path / "a", tmp_path / "d") == -1

    def test_format_diff(self):
        assert format_diff({}, "Config diff") == "No differences in Config diff."
        assert format_diff({"seed": (1, 2)}, "d") == "d:\n  seed: 1 -> 2"
