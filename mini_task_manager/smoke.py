from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import httpx

SMOKE_PATHS: List[str] = ["/", "/health", "/tasks"]


async def probe(client: httpx.AsyncClient, path: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {"path": path}
    try:
        r = await client.get(path)
    except httpx.HTTPError as e:
        out["error"] = str(e)
        return out

    out["status_code"] = r.status_code
    if r.headers.get("content-type", "").startswith("application/json"):
        try:
            out["body"] = r.json()
        except ValueError as e:
            out["body"] = r.text
            out["error"] = f"invalid JSON body: {e}"
    else:
        out["body"] = r.text
    return out


async def run_smoke(
    base_url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout_sec: float = 10.0,
) -> Dict[str, Any]:
    if client is None:
        async with httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout_sec) as own:
            return await run_smoke(base_url, client=own)

    checks = [await probe(client, path) for path in SMOKE_PATHS]
    return {
        "base_url": base_url,
        "ok": all(c.get("status_code") == 200 and "error" not in c for c in checks),
        "checks": checks,
    }


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Probe a running Mini Task Manager API")
    ap.add_argument("--base-url", default="http://localhost:3000")
    ap.add_argument("--timeout", type=float, default=10.0)
    args = ap.parse_args(argv)

    report = asyncio.run(run_smoke(args.base_url, timeout_sec=args.timeout))
    print(json.dumps(report, indent=2, ensure_ascii=False))
    return 0 if report["ok"] else 1


if __name__ == "__main__":
    sys.exit(main())
