"""
Square-root demo.

Computes exact rational square roots of a fixed set of integers with
Newton's method and checks that root**2 differs from the radicand by
less than a small bound (10 / 2**53 by default).

Usage:
    blocknum-sqrt-demo
    blocknum-sqrt-demo --config configs/sqrt_demo.yaml
    blocknum-sqrt-demo --inputs 2 3 7 --output-dir outputs/sqrt
"""

import argparse
import sys
import time
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .constants import DEMO_ERROR_BITS, DEMO_ERROR_NUMERATOR, DEMO_INPUTS
from .logging import RunLogger, create_manifest
from .magnitude import UnsignedMagnitude
from .rational import Rational, SqrtConfig, newton_sqrt


@dataclass
class DemoConfig:
    """Configuration for a demo run."""
    inputs: Tuple[int, ...] = DEMO_INPUTS
    error_numerator: int = DEMO_ERROR_NUMERATOR   # bound = numerator / 2**error_bits
    error_bits: int = DEMO_ERROR_BITS
    sqrt: SqrtConfig = field(default_factory=SqrtConfig)
    output_dir: Optional[str] = None              # no JSONL output when None
    run_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DemoConfig":
        data = dict(data or {})
        unknown = set(data) - {f for f in cls.__dataclass_fields__}
        if unknown:
            raise ValueError(f"unknown config keys: {sorted(unknown)}")
        if "inputs" in data:
            data["inputs"] = tuple(int(v) for v in data["inputs"])
        if "sqrt" in data:
            data["sqrt"] = SqrtConfig(**(data["sqrt"] or {}))
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["inputs"] = list(self.inputs)
        return d

    @property
    def error_bound(self) -> Rational:
        return Rational(
            UnsignedMagnitude.from_native(self.error_numerator),
            UnsignedMagnitude.power_of_two(self.error_bits),
        )


def load_config(config_path) -> DemoConfig:
    with open(config_path, 'r') as f:
        return DemoConfig.from_dict(yaml.safe_load(f))


@dataclass
class SqrtResult:
    """Outcome of one square root."""
    radicand: int
    root: Rational
    iterations: int
    error: Rational      # |root**2 - radicand|
    passed: bool
    elapsed_s: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radicand": self.radicand,
            "root": str(self.root),
            "root_float": self.root.to_float(),
            "numerator_bits": self.root.numerator.length,
            "denominator_bits": self.root.denominator.length,
            "iterations": self.iterations,
            "error": self.error.to_float(),
            "passed": self.passed,
            "elapsed_s": self.elapsed_s,
        }


def sqrt_with_error(radicand: int, config: DemoConfig) -> SqrtResult:
    value = Rational(UnsignedMagnitude.from_native(radicand, 128))
    t0 = time.time()
    root, iterations = newton_sqrt(value, config.sqrt)
    elapsed = time.time() - t0
    error = root.powi(2).sub_from(value).abs()
    return SqrtResult(
        radicand=radicand,
        root=root,
        iterations=iterations,
        error=error,
        passed=error < config.error_bound,
        elapsed_s=elapsed,
    )


def run_sqrt_demo(config: Optional[DemoConfig] = None,
                  logger: Optional[RunLogger] = None) -> List[SqrtResult]:
    """Square roots of every configured input, logged when a logger is given."""
    if config is None:
        config = DemoConfig()
    t_start = time.time()
    results = []
    for radicand in config.inputs:
        result = sqrt_with_error(radicand, config)
        results.append(result)
        if logger is not None:
            logger.log_result(result.to_dict())
    if logger is not None:
        logger.log_metrics({
            "n_inputs": len(results),
            "n_failed": sum(1 for r in results if not r.passed),
            "total_iterations": sum(r.iterations for r in results),
            "elapsed_s": time.time() - t_start,
        })
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Exact rational square roots by Newton's method"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="Path to YAML config file")
    parser.add_argument("--inputs", type=int, nargs="+", default=None,
                        help="Radicands (overrides config)")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Write manifest and JSONL logs here")
    parser.add_argument("--run-id", type=str, default=None,
                        help="Run ID (default: auto-generated)")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else DemoConfig()
    if args.inputs:
        config.inputs = tuple(args.inputs)
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.run_id:
        config.run_id = args.run_id
    if any(v < 0 for v in config.inputs):
        parser.error("inputs must be non-negative")

    print("blocknum sqrt demo")
    print(f"  Inputs: {list(config.inputs)}")
    print(f"  Max error: {config.error_bound}")

    if config.output_dir:
        output_dir = Path(config.output_dir)
        run_id = config.run_id or f"run_{int(time.time())}"
        create_manifest(run_id, config.to_dict()).save(output_dir / "manifest.json")
        with RunLogger(output_dir) as logger:
            results = run_sqrt_demo(config, logger)
        print(f"  Output: {output_dir}")
    else:
        results = run_sqrt_demo(config)

    for r in results:
        status = "ok" if r.passed else "FAIL"
        print(f"  sqrt({r.radicand}) = {r.root.to_float()!r}  "
              f"[{r.iterations} iterations, error {r.error.to_float():.3e}] {status}")

    n_failed = sum(1 for r in results if not r.passed)
    if n_failed:
        print(f"{n_failed} of {len(results)} roots exceeded the error bound", flush=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
