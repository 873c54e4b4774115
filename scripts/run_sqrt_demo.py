#!/usr/bin/env python3
"""
Square-root demo runner.

Computes exact rational square roots of the configured inputs and checks
the |root**2 - x| error bound.  Exit status 1 if any root misses it.

Usage:
    python scripts/run_sqrt_demo.py
    python scripts/run_sqrt_demo.py --config configs/sqrt_demo.yaml
    python scripts/run_sqrt_demo.py --inputs 2 3 --output-dir outputs/try
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from blocknum.demo import main


if __name__ == "__main__":
    sys.exit(main())
