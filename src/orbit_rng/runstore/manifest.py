"""Run manifest: which recurrences produced a run, and hashes to check it against."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from orbit_rng.core.orbit import WARMUP
from orbit_rng.core.recurrence import LEHMER, TRIPLE

HEAD_SIZE = 3


@dataclass
class RunManifest:
    """Schema for manifest.json. Its presence marks a finished run."""

    run_id: str = ""
    started_at: str = ""
    finished_at: str = ""
    config_hash: str = ""
    # multipliers, moduli and warm-up the samples were generated with
    generator: dict = field(default_factory=dict)
    n_samples: int = 0
    head: list = field(default_factory=list)  # first values, newest iterate first
    chunks: list[str] = field(default_factory=list)
    artifacts: dict[str, str] = field(default_factory=dict)  # filename -> sha256

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, d: dict) -> RunManifest:
        return cls(**d)

    @classmethod
    def load(cls, run_dir: Path) -> RunManifest:
        with open(Path(run_dir) / "manifest.json") as f:
            return cls.from_dict(json.load(f))


def generator_parameters(kind: str) -> dict:
    """The recurrence parameters behind a sequence kind."""
    recs = [LEHMER] if kind == "int" else list(TRIPLE)
    return {
        "kind": kind,
        "recurrences": [[r.multiplier, r.modulus] for r in recs],
        "warmup": WARMUP,
        "combine": "identity" if kind == "int" else "fractional_sum",
    }


def compute_config_hash(config_dict: dict) -> str:
    """SHA-256 of the JSON-serialized config, key order ignored."""
    return hashlib.sha256(json.dumps(config_dict, sort_keys=True).encode()).hexdigest()


def derive_run_id(config_hash: str, generator: dict) -> str:
    """12-char ID; changes if either the config or the recurrence constants change."""
    blob = config_hash + "|" + json.dumps(generator, sort_keys=True)
    return hashlib.sha256(blob.encode()).hexdigest()[:12]


def compute_file_hash(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def build_manifest(
    config_dict: dict,
    values: np.ndarray,
    run_dir: Path,
    started_at: datetime,
    chunks: list[str],
) -> RunManifest:
    """Hash the config, summary and every sample chunk of a stored run."""
    config_hash = compute_config_hash(config_dict)
    generator = generator_parameters(config_dict["kind"])
    run_dir = Path(run_dir)

    artifacts = {
        fname: compute_file_hash(run_dir / fname)
        for fname in ["config.json", "summary.json", *chunks]
        if (run_dir / fname).exists()
    }

    return RunManifest(
        run_id=derive_run_id(config_hash, generator),
        started_at=started_at.isoformat(),
        finished_at=datetime.now(timezone.utc).isoformat(),
        config_hash=config_hash,
        generator=generator,
        n_samples=len(values),
        head=np.asarray(values[:HEAD_SIZE]).tolist(),
        chunks=list(chunks),
        artifacts=artifacts,
    )


def verify_artifacts(run_dir: Path) -> list[str]:
    """Names of artifacts whose current hash no longer matches the manifest."""
    manifest = RunManifest.load(run_dir)
    bad = []
    for fname, expected in sorted(manifest.artifacts.items()):
        fpath = Path(run_dir) / fname
        if not fpath.exists() or compute_file_hash(fpath) != expected:
            bad.append(fname)
    return bad
