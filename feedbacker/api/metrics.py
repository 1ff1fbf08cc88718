from __future__ import annotations

import time
from typing import Dict, Tuple, DefaultDict
from collections import defaultdict

# Counters bumped by routers and middleware
_counters: Dict[str, int] = {
    "outlines_parsed": 0,
    "topics_emitted": 0,
    "suggestions_extracted": 0,
    "suggestion_groups_built": 0,
    "rate_limited": 0,
    "oversize_rejected": 0,
}

# HTTP request metrics
_http_requests_total: DefaultDict[Tuple[str, str, int], int] = defaultdict(int)  # (method, path, status) -> count

# histogram buckets (seconds)
_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0)
_http_hist_buckets: DefaultDict[Tuple[str, str, float], int] = defaultdict(int)  # (method, path, le) -> count
_http_hist_sum: DefaultDict[Tuple[str, str], float] = defaultdict(float)  # (method, path) -> sum
_http_hist_count: DefaultDict[Tuple[str, str], int] = defaultdict(int)  # (method, path) -> count


def inc(name: str, value: int = 1) -> None:
    _counters[name] = _counters.get(name, 0) + value


def record_http_request(*, method: str, path: str, status: int, duration_s: float) -> None:
    _http_requests_total[(method, path, status)] += 1
    key = (method, path)
    t = max(0.0, float(duration_s))
    _http_hist_sum[key] += t
    _http_hist_count[key] += 1
    # first matching bucket only; exposition accumulates
    for b in _BUCKETS:
        if t <= b:
            _http_hist_buckets[(method, path, b)] += 1
            break


def snapshot_metrics_json() -> Dict[str, float | int]:
    data: Dict[str, float | int] = {**_counters}
    data["http_requests"] = sum(_http_requests_total.values())
    data["ts"] = time.time()
    return data


def _labels(d: Dict[str, str]) -> str:
    items = ",".join(f'{k}="{v}"' for k, v in d.items())
    return f"{{{items}}}" if items else ""


def snapshot_metrics_text() -> str:
    lines: list[str] = []
    lines.append("# HELP http_requests_total Total HTTP requests.")
    lines.append("# TYPE http_requests_total counter")
    for (method, path, status), count in sorted(_http_requests_total.items()):
        lines.append(
            f'http_requests_total{_labels({"method":method,"path":path,"status":str(status)})} {count}'
        )
    lines.append("# HELP http_request_duration_seconds Request duration in seconds.")
    lines.append("# TYPE http_request_duration_seconds histogram")
    keys = {(m, p) for (m, p, _le) in _http_hist_buckets.keys()} | set(_http_hist_count.keys())
    for (method, path) in sorted(keys):
        cum = 0
        for b in _BUCKETS:
            cum += _http_hist_buckets.get((method, path, b), 0)
            lines.append(
                f'http_request_duration_seconds_bucket{_labels({"method":method,"path":path,"le":str(b)})} {cum}'
            )
        # +Inf bucket equals total count
        total = _http_hist_count.get((method, path), 0)
        lines.append(
            f'http_request_duration_seconds_bucket{_labels({"method":method,"path":path,"le":"+Inf"})} {total}'
        )
        s = _http_hist_sum.get((method, path), 0.0)
        lines.append(f'http_request_duration_seconds_sum{_labels({"method":method,"path":path})} {s}')
        lines.append(
            f'http_request_duration_seconds_count{_labels({"method":method,"path":path})} {total}'
        )
    for name in sorted(_counters):
        prom = f"{name}_total"
        lines.append(f"# TYPE {prom} counter")
        lines.append(f"{prom} {_counters.get(name, 0)}")
    return "\n".join(lines) + "\n"
