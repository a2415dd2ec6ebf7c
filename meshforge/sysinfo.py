"""Memory and CPU usage of the current process."""

from __future__ import annotations

import sys

import psutil

try:
    import resource
except ImportError:  # not available on Windows
    resource = None

_PROCESS = psutil.Process()
_CPU_COUNT = psutil.cpu_count() or 1
_KB = 1024.0


def memory_usage_bytes() -> int:
    """Resident memory of this process, in bytes."""
    return int(_PROCESS.memory_info().rss)


def memory_usage_kb() -> float:
    return memory_usage_bytes() / _KB


def memory_usage_mb() -> float:
    return memory_usage_kb() / _KB


def memory_usage_gb() -> float:
    return memory_usage_mb() / _KB


def page_usage_bytes() -> int:
    """Committed (paged or virtual) memory of this process, in bytes."""
    info = _PROCESS.memory_info()
    pagefile = getattr(info, "pagefile", None)
    return int(pagefile if pagefile is not None else info.vms)


def page_usage_kb() -> float:
    return page_usage_bytes() / _KB


def page_usage_mb() -> float:
    return page_usage_kb() / _KB


def page_usage_gb() -> float:
    return page_usage_mb() / _KB


def peak_memory_usage_bytes() -> int:
    """Highest resident memory this process has reached, in bytes."""
    info = _PROCESS.memory_info()
    peak = getattr(info, "peak_wset", None)
    if peak is None and resource is not None:
        max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        peak = max_rss if sys.platform == "darwin" else max_rss * 1024
    if peak is None:
        peak = info.rss
    return int(max(peak, info.rss))


def peak_memory_usage_kb() -> float:
    return peak_memory_usage_bytes() / _KB


def peak_memory_usage_mb() -> float:
    return peak_memory_usage_kb() / _KB


def peak_memory_usage_gb() -> float:
    return peak_memory_usage_mb() / _KB


def cpu_usage() -> float:
    """Percentage of total CPU time used by this process since the last call."""
    return _PROCESS.cpu_percent(interval=None) / _CPU_COUNT