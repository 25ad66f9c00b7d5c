from __future__ import annotations

import json
import random
import time
from pathlib import Path
from typing import Any

# Fixed clock for reproducible token runs: 2023-11-14T22:13:20Z
REFERENCE_NOW = 1_700_000_000.0


def utc_timestamp() -> str:
    # e.g. 2026-01-08T12-34-56Z (safe for filenames)
    return time.strftime("%Y-%m-%dT%H-%M-%SZ", time.gmtime())


def rand_salt(rng: random.Random) -> str:
    return "".join(rng.choice("0123456789abcdef") for _ in range(4))


def report_path(output_dir: str | Path, name: str = "selfcheck") -> Path:
    safe = "".join(ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in name.strip())[:60]
    return Path(output_dir) / f"{utc_timestamp()}_{safe}.json"


def write_json(path: str | Path, obj: Any) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True), encoding="utf-8")
    return path
