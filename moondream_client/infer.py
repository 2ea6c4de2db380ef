from __future__ import annotations

"""CLI entrypoint: run one Moondream operation on an image and print the result."""

import argparse
from dataclasses import asdict
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import requests

from moondream_client.config import Config
from moondream_client.schemas.results import CaptionLength, DetectResult, PointsResult
from moondream_client.services.errors import TransportError
from moondream_client.services.interfaces import VisionClient
from moondream_client.services.moondream_client import MoondreamClient
from moondream_client.utils.images import (
    file_to_data_uri,
    is_remote_url,
    read_image_bgr,
    read_image_bgr_from_data_uri,
    read_image_bgr_from_url,
)
from moondream_client.utils.visualization import draw_boxes, draw_points

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("image", type=str, help="Local image path or public http(s) URL.")
    common.add_argument("--api-url", type=str, default=None, help="Base URL of a local/self-hosted Moondream server.")
    common.add_argument("--token", type=str, default=None, help="API key (default: $MOONDREAM_API_KEY).")
    common.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: 5).")
    common.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Extra request header; may be repeated.",
    )
    common.add_argument("--json", action="store_true", help="Print the raw result as JSON.")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    save = argparse.ArgumentParser(add_help=False)
    save.add_argument("--save", type=Path, default=None, help="Optional path to save the annotated image.")

    p = argparse.ArgumentParser(prog="moondream-client", description="Query the Moondream vision API.")
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("point", parents=[common, save], help="Locate objects as centre points.")
    sp.add_argument("object", type=str, help="Object to point at, e.g. 'avocado'.")

    sd = sub.add_parser("detect", parents=[common, save], help="Detect objects as bounding boxes.")
    sd.add_argument("object", type=str, help="Object to detect.")

    sc = sub.add_parser("caption", parents=[common], help="Caption the image.")
    sc.add_argument(
        "--length",
        choices=[c.value for c in CaptionLength],
        default=CaptionLength.NORMAL.value,
        help="Caption length (default: normal).",
    )

    sq = sub.add_parser("query", parents=[common], help="Ask a question about the image.")
    sq.add_argument("question", type=str, help="Question to answer.")
    return p


def parse_headers(raw: List[str]) -> List[Tuple[str, str]]:
    headers: List[Tuple[str, str]] = []
    for item in raw:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header {item!r}, expected NAME=VALUE")
        headers.append((name.strip(), value.strip()))
    return headers


def build_config_from_env_and_args(args) -> Config:
    # Env defaults from Config; CLI flags win when provided
    cfg = Config()
    return Config(
        api_url=cfg.api_url if args.api_url is None else args.api_url,
        api_token=cfg.api_token if args.token is None else args.token,
        timeout=cfg.timeout if args.timeout is None else args.timeout,
    )


def create_client(cfg: Config, headers: List[Tuple[str, str]]) -> MoondreamClient:
    if cfg.api_url and cfg.api_token:
        client = MoondreamClient.remote(cfg.api_token).with_endpoint(cfg.api_url)
    elif cfg.api_url:
        client = MoondreamClient.local(cfg.api_url)
    elif cfg.api_token:
        client = MoondreamClient.remote(cfg.api_token)
    else:
        raise ValueError("An API key is required for the hosted service (set MOONDREAM_API_KEY or --token)")
    client = client.with_timeout(cfg.timeout)
    if headers:
        client = client.with_headers(headers)
    return client


def image_reference(image: str) -> str:
    if is_remote_url(image) or image.startswith("data:"):
        return image
    return file_to_data_uri(image)


def run(client: VisionClient, args, image_ref: str):
    if args.command == "point":
        return client.points(image_ref, args.object)
    if args.command == "detect":
        return client.detect(image_ref, args.object)
    if args.command == "caption":
        return client.caption(image_ref, CaptionLength(args.length))
    return client.query(image_ref, args.question)


def save_annotated(args, result) -> None:
    if is_remote_url(args.image):
        image_bgr = read_image_bgr_from_url(args.image)
    elif args.image.startswith("data:"):
        image_bgr = read_image_bgr_from_data_uri(args.image)
    else:
        image_bgr = read_image_bgr(args.image)
    if isinstance(result, PointsResult):
        vis = draw_points(image_bgr, result.points)
    else:
        vis = draw_boxes(image_bgr, result.objects, label=args.object)
    args.save.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(args.save), vis):
        raise RuntimeError(f"Failed to write image to {args.save}")
    print(f"Saved: {args.save}")


def print_summary(result) -> None:
    if isinstance(result, PointsResult):
        print(f"{len(result.points)} point(s)")
        for p in result.points:
            print(f"({p.x:.3f},{p.y:.3f})")
    elif isinstance(result, DetectResult):
        print(f"{len(result.objects)} object(s)")
        for o in result.objects:
            print(f"({o.x_min:.3f},{o.y_min:.3f},{o.x_max:.3f},{o.y_max:.3f})")
    elif hasattr(result, "caption"):
        print(result.caption)
    else:
        print(result.answer)


def main(argv: Optional[List[str]] = None, client: Optional[VisionClient] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if client is None:
        try:
            headers = parse_headers(args.header)
            client = create_client(build_config_from_env_and_args(args), headers)
        except ValueError as e:
            parser.error(str(e))

    try:
        image_ref = image_reference(args.image)
    except (OSError, ValueError) as e:
        logger.error("Cannot load image %s: %s", args.image, e)
        return 2

    try:
        result = run(client, args, image_ref)
    except TransportError as e:
        logger.error("%s", e)
        return 1

    if args.json:
        print(json.dumps(asdict(result), indent=2))
    else:
        print_summary(result)

    if getattr(args, "save", None):
        try:
            save_annotated(args, result)
        except (OSError, RuntimeError, ValueError, cv2.error, requests.RequestException) as e:
            logger.error("Cannot save annotated image to %s: %s", args.save, e)
            return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
