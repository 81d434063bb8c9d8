"""Store a generated sequence as a run bundle."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import numpy as np

from orbit_rng.core.config import SequenceConfig
from orbit_rng.runstore.manifest import RunManifest, build_manifest
from orbit_rng.runstore.samples import SampleWriter


def write_json(path: Path, payload: dict) -> None:
    """Replace path with payload as JSON; readers never see a partial file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", dir=path.parent, suffix=".tmp", delete=False
    ) as tmp:
        json.dump(payload, tmp, indent=2)
        tmp.flush()
        os.fsync(tmp.fileno())
    try:
        os.replace(tmp.name, path)
    except OSError:
        os.unlink(tmp.name)
        raise


def store_run(
    run_dir: Path,
    config: SequenceConfig,
    values: np.ndarray,
    summary: dict,
    started_at: datetime,
    chunk_size: int = 100_000,
) -> RunManifest:
    """Write config, samples and summary, then the manifest.

    Samples from an earlier run in the same directory are removed first.
    A directory without manifest.json holds an incomplete run.
    """
    run_dir = Path(run_dir)
    manifest_path = run_dir / "manifest.json"
    if manifest_path.exists():
        manifest_path.unlink()

    config_dict = asdict(config)
    write_json(run_dir / "config.json", config_dict)

    with SampleWriter(run_dir, chunk_size=chunk_size) as samples:
        samples.extend(values)
    write_json(run_dir / "summary.json", summary)

    manifest = build_manifest(
        config_dict=config_dict,
        values=values,
        run_dir=run_dir,
        started_at=started_at,
        chunks=[p.name for p in samples.chunk_paths],
    )
    write_json(manifest_path, manifest.to_dict())
    return manifest
