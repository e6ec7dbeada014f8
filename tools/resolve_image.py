#!/usr/bin/env python3
"""Print how image references resolve under the current settings."""

import argparse
import json
import sys

from pcrex.assets import ImageResolver
from pcrex.assets import load_environment_config
from pcrex.settings import ConfigError


def main():
    parser = argparse.ArgumentParser(description="Resolve stored image references to URLs.")
    parser.add_argument("refs", nargs="+", help="Raw image references, as stored on products")
    parser.add_argument("--target", choices=["local", "deployed"], help="Override ASSET_TARGET")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per reference")
    args = parser.parse_args()

    try:
        config = load_environment_config(target=args.target)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    resolver = ImageResolver(config)
    for ref in args.refs:
        asset = resolver.resolve(ref)
        if args.json:
            print(json.dumps({"ref": ref, **asset.as_dict()}))
        else:
            print(f"{ref!r:40} {asset.kind.value:16} {asset.url}")


if __name__ == "__main__":
    main()
