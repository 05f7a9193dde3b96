import json
import logging
import threading
import time
import uuid
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 15

_METRICS_LOCK = threading.Lock()


def _record(metrics: Optional[Dict[str, Any]], latency: float, error: bool = False) -> None:
    if metrics is None:
        return
    with _METRICS_LOCK:
        metrics.setdefault("latencies", []).append(latency)
        metrics["requests"] = metrics.get("requests", 0) + 1
        if error:
            metrics["errors"] = metrics.get("errors", 0) + 1


def safe_request(
    url: str,
    session: Optional[requests.Session] = None,
    metrics: Optional[Dict[str, Any]] = None,
) -> requests.Response:
    """Make an HTTP GET request with structured logging and basic metrics.

    A single attempt is made; failures are logged and re-raised.
    """
    sess = session or requests.Session()
    request_id = uuid.uuid4().hex[:8]
    start = time.time()
    try:
        response = sess.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        latency = time.time() - start
        _record(metrics, latency, error=True)
        log_data = {
            "event": "request_error",
            "url": url,
            "error": str(e),
            "latency": round(latency, 2),
            "request_id": request_id,
        }
        logger.warning(json.dumps(log_data))
        raise
    latency = time.time() - start
    _record(metrics, latency)
    log_data = {
        "event": "request",
        "url": url,
        "status": response.status_code,
        "latency": round(latency, 2),
        "request_id": request_id,
    }
    logger.info(json.dumps(log_data))
    return response
