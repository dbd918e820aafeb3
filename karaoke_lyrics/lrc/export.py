from __future__ import annotations

import json
from dataclasses import asdict
from typing import Iterable

from .model import LyricBundle, LyricLine


def export_json(bundle: LyricBundle) -> str:
    return json.dumps(asdict(bundle), ensure_ascii=False, indent=2)


def export_lines_json(lines: Iterable[LyricLine]) -> str:
    return json.dumps(
        [
            {
                "index": ln.index,
                "start_ms": ln.start_ms,
                "duration_ms": ln.duration_ms,
                "text": ln.text,
                "chars": [
                    {"start_ms": t.start_ms, "duration_ms": t.duration_ms, "param": t.param, "text": t.text}
                    for t in ln.tokens
                ],
            }
            for ln in lines
        ],
        ensure_ascii=False,
        indent=2,
    )
