#!/usr/bin/env python3
from __future__ import annotations

import subprocess
import sys

REFERENCE_RATIOS = ["0.5", "1.5", "1.0", "1.8", "0.4", "0.7", "0.9", "1.1", "1.7", "2.0", "2.1"]


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def main() -> int:
    checks = [
        [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_*.py"],
        [sys.executable, "-m", "app.justified.main", *REFERENCE_RATIOS],
    ]
    for cmd in checks:
        code = run(cmd)
        if code != 0:
            print("\n❌ dev_check failed")
            return code

    print("\n✅ dev_check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
