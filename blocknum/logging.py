"""
Structured logging for square-root demo runs.

Produces:
  - manifest.json: One-time run metadata (git hash, config, host info)
  - results.jsonl: One record per radicand (root, iterations, error, pass/fail)
  - metrics.jsonl: Timing data
"""

import json
import hashlib
import platform
import subprocess
import sys
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any

import numpy as np


@dataclass
class RunManifest:
    """Run-level metadata, saved once per run."""
    run_id: str
    timestamp: str
    git_commit: str
    config_hash: str
    host_name: str
    python_version: str
    numpy_version: str
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def _get_git_commit() -> str:
    """Get current git commit hash, or 'unknown'."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True, text=True, timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def config_hash(config: Dict[str, Any]) -> str:
    """Deterministic hash of config dict."""
    s = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def create_manifest(run_id: str, config: Dict[str, Any]) -> RunManifest:
    """Create a RunManifest with auto-detected metadata."""
    return RunManifest(
        run_id=run_id,
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        git_commit=_get_git_commit(),
        config_hash=config_hash(config),
        host_name=platform.node(),
        python_version=sys.version,
        numpy_version=np.__version__,
        config=config,
    )


class RunLogger:
    """Structured JSONL logger for one demo run.

    Writes two files:
      - results.jsonl  (one line per radicand)
      - metrics.jsonl  (timing)
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._results_path = self.output_dir / "results.jsonl"
        self._metrics_path = self.output_dir / "metrics.jsonl"

        # append mode: repeated runs into one directory accumulate
        self._results_f = open(self._results_path, 'a')
        self._metrics_f = open(self._metrics_path, 'a')

        self._results_count = 0
        self._failures_count = 0

    @property
    def results_path(self) -> Path:
        return self._results_path

    @property
    def metrics_path(self) -> Path:
        return self._metrics_path

    def log_result(self, record: Dict[str, Any]):
        """Log one square-root result."""
        record = dict(record)
        record["timestamp"] = time.time()
        self._results_f.write(json.dumps(record, default=str) + "\n")
        self._results_f.flush()
        self._results_count += 1
        if not record.get("passed", True):
            self._failures_count += 1

    def log_metrics(self, record: Dict[str, Any]):
        """Log timing metrics."""
        record = dict(record)
        record["timestamp"] = time.time()
        self._metrics_f.write(json.dumps(record, default=str) + "\n")
        self._metrics_f.flush()

    def close(self):
        """Flush and close all log files."""
        for f in [self._results_f, self._metrics_f]:
            if not f.closed:
                f.flush()
                f.close()

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "results_logged": self._results_count,
            "failures_logged": self._failures_count,
        }

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
