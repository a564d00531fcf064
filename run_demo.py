#!/usr/bin/env python3
"""Write one entry per severity to today's log file and the console."""
from __future__ import annotations

import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from sharedlog import get_facility, get_shared_logger

log = get_shared_logger()


def handle_request(path: str) -> None:
    req_log = log.with_field("request_id", uuid.uuid4().hex[:8])
    req_log.trace("Routing %s", path)
    req_log.debug("Cache miss", fields={"path": path})
    req_log.info("Served %s", path, fields={"status": 200})


if __name__ == "__main__":
    log.info("Logging to %s", get_facility().log_path)
    handle_request("/health")
    handle_request("/jobs")
    log.warning("Disk usage high", fields={"percent": 91})
    try:
        open("/nonexistent/config.yaml")
    except OSError as exc:
        log.with_error(exc).error("Could not read config")
    if "--fatal" in sys.argv:
        log.fatal("Exiting on request")
    log.info("Done.")
