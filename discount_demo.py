#!/usr/bin/env python3
"""
Evaluate the discounts of an order file against its cart.

Reads a JSON order of the form {"cart": [...], "discounts": [...]}, logs every
discount action that applies and prints the resulting actions as JSON.

Env:
  DISCOUNT_ORDER_FILE  default order file (falls back to samples/order.json)
  DISCOUNT_LOG_LEVEL   default log level (INFO)
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from discount_config import action_to_record, load_order
from discounts import DiscountEngine
from rules import ConfigurationError

ROOT = Path(__file__).resolve().parent
DEFAULT_ORDER_FILE = ROOT / "samples" / "order.json"

logger = logging.getLogger("discount_demo")


def write_artifact(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument(
        "order_file",
        nargs="?",
        type=Path,
        default=Path(os.environ.get("DISCOUNT_ORDER_FILE", DEFAULT_ORDER_FILE)),
    )
    parser.add_argument("--log-level", default=os.environ.get("DISCOUNT_LOG_LEVEL", "INFO"))
    parser.add_argument("--output", type=Path, default=None, help="Also save the actions JSON to this path")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        order = load_order(args.order_file)
        actions = DiscountEngine(order.cart).apply_discounts(order.discounts)
    except ConfigurationError as exc:
        logger.error("Invalid discount configuration: %s", exc)
        return 2

    if not actions:
        logger.info("No discounts apply to this cart")
    for action in actions:
        logger.info("Applied %s: %s", action.type, action_to_record(action))

    payload = json.dumps([action_to_record(action) for action in actions], indent=2)
    print(payload)
    if args.output:
        saved = write_artifact(args.output, payload)
        logger.info("Saved applied actions to %s", saved)
    return 0


if __name__ == "__main__":
    sys.exit(main())
