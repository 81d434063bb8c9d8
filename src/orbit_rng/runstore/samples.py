"""NDJSON sample writer with periodic flush and chunk rollover."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np


class SampleWriter:
    """Append one {"i": index, "value": v} line per generated value."""

    def __init__(
        self, run_dir: Path, chunk_size: int = 100_000, filename: str = "samples.ndjson"
    ):
        self.run_dir = Path(run_dir)
        self.run_dir.mkdir(parents=True, exist_ok=True)
        self.chunk_size = chunk_size
        self.filename = filename
        self.count = 0
        self._lines_in_chunk = 0
        self._chunk_index = 0
        self._file = None
        for stale in chunk_files(self.run_dir, filename):
            stale.unlink()
        self._open_file()

    def _chunk_path(self, index: int) -> Path:
        if index == 0:
            return self.run_dir / self.filename
        stem = Path(self.filename).stem
        suffix = Path(self.filename).suffix
        return self.run_dir / f"{stem}_{index:04d}{suffix}"

    def _open_file(self) -> None:
        self._file = open(self._chunk_path(self._chunk_index), "w")

    def append(self, value) -> None:
        line = json.dumps({"i": self.count, "value": value}, default=_json_default)
        self._file.write(line + "\n")
        self.count += 1
        self._lines_in_chunk += 1
        if self._lines_in_chunk >= self.chunk_size:
            self._rollover()

    def extend(self, values: np.ndarray) -> None:
        for v in values:
            self.append(v)

    def flush(self) -> None:
        if self._file and not self._file.closed:
            self._file.flush()

    def close(self) -> None:
        if self._file and not self._file.closed:
            self._file.flush()
            self._file.close()

    @property
    def path(self) -> Path:
        """Path to the first chunk."""
        return self.run_dir / self.filename

    @property
    def chunk_paths(self) -> list[Path]:
        return [self._chunk_path(i) for i in range(self._chunk_index + 1)]

    def _rollover(self) -> None:
        self.close()
        self._chunk_index += 1
        self._lines_in_chunk = 0
        self._open_file()

    def __enter__(self) -> SampleWriter:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def chunk_files(run_dir: Path, filename: str = "samples.ndjson") -> list[Path]:
    """Sample chunks present on disk, first chunk first."""
    run_dir = Path(run_dir)
    stem = Path(filename).stem
    suffix = Path(filename).suffix
    first = [run_dir / filename] if (run_dir / filename).exists() else []
    return first + sorted(run_dir.glob(f"{stem}_[0-9][0-9][0-9][0-9]{suffix}"))


def load_samples(run_dir: Path, filename: str = "samples.ndjson") -> np.ndarray:
    """Read every chunk of a run's samples back, in index order."""
    values = []
    for path in chunk_files(run_dir, filename):
        with open(path) as f:
            for line in f:
                line = line.strip()
                if line:
                    values.append(json.loads(line)["value"])
    return np.array(values)


def _json_default(obj):
    """Handle numpy scalars."""
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
