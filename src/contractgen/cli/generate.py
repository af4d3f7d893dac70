"""Generate a single contract from the command line."""
from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from contractgen.common.config import load_settings
from contractgen.common.logging_setup import setup_logging
from contractgen.common.schema import ContractType
from contractgen.serve.service import ContractPromptService

LOGGER = logging.getLogger("contractgen.cli.generate")

def parse_params(pairs: list[str]) -> dict[str, str]:
    """Turn ``key=value`` arguments into a params mapping."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        params[key.strip()] = value
    return params

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Generate a Solidity contract")
    ap.add_argument("--type", required=True, choices=[t.value for t in ContractType])
    ap.add_argument("--param", action="append", default=[], help="Template field as key=value")
    ap.add_argument("--out", default=None, help="Write code to this file instead of stdout")
    ap.add_argument("--config", default=None, help="YAML config path")
    args = ap.parse_args(argv)

    settings = load_settings(args.config)
    setup_logging(settings.log_level)
    try:
        params = parse_params(args.param)
    except argparse.ArgumentTypeError as e:
        ap.error(str(e))

    service = ContractPromptService(settings)
    resp = asyncio.run(service.handle("POST", {"type": args.type, "params": params}))
    if resp.status_code != 200 or resp.body is None:
        print(json.dumps(resp.body), file=sys.stderr)
        return 1

    code = resp.body["code"]
    if args.out:
        Path(args.out).write_text(code + "\n", encoding="utf-8")
        LOGGER.info("Wrote %s contract to %s", args.type, args.out)
    else:
        print(code)
    return 0

if __name__ == "__main__":
    sys.exit(main())
