"""Launch the contract generation API with uvicorn."""
from __future__ import annotations
import argparse
import os

import uvicorn

def main() -> None:
    ap = argparse.ArgumentParser(description="Serve the contract generation API")
    ap.add_argument("--host", default=os.getenv("CONTRACTGEN_HOST", "0.0.0.0"))
    ap.add_argument("--port", type=int, default=int(os.getenv("CONTRACTGEN_PORT", "8000")))
    ap.add_argument("--config", default=None, help="YAML config path")
    args = ap.parse_args()

    if args.config:
        # picked up by load_settings() when the app module is imported
        os.environ["CONTRACTGEN_CONFIG"] = args.config

    uvicorn.run("contractgen.serve.fastapi_app:app", host=args.host, port=args.port)

if __name__ == "__main__":
    main()
