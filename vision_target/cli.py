import sys
import os
import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple
import cv2

from .config import DEFAULT_CONFIG, VisionConfig
from .core import analyze_frame
from .estimate import TargetEstimate

USAGE = 'Usage: python -m vision_target.cli "frames.json" [--image frame.jpg] [--show] [--debug]'

logger = logging.getLogger(__name__)


MAX_COORD = 2 ** 31 - 1


def _is_coordinate(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v) and abs(v) <= MAX_COORD


def load_frames(path: str) -> Tuple[List[List[Any]], VisionConfig]:
    """Read recorded frames: a list of frames, or {"config": {...}, "frames": [...]}."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Cannot read frames: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = DEFAULT_CONFIG
    if isinstance(data, dict):
        config = VisionConfig.from_dict(data.get("config") or {})
        data = data.get("frames")

    if not isinstance(data, list):
        raise ValueError(f"Expected a list of frames in {path}")
    for n, frame in enumerate(data):
        if not isinstance(frame, list):
            raise ValueError(f"Frame {n} is not a list of contours")
        for contour in frame:
            if not isinstance(contour, list) or any(not isinstance(p, list) or len(p) != 2 for p in contour):
                raise ValueError(f"Frame {n} holds a contour that is not a list of [x, y] points")
            for p in contour:
                if not all(_is_coordinate(v) for v in p):
                    raise ValueError(f"Frame {n} holds a non-numeric or out-of-range point {p}")
    return data, config


def replay(frames: List[List[Any]], config: VisionConfig = DEFAULT_CONFIG) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    estimate = TargetEstimate()
    results: List[Dict[str, Any]] = []
    last_hit: Dict[str, Any] = {"pair": None, "estimate": None}

    for n, contours in enumerate(frames):
        res = analyze_frame(contours, config)
        pair, value = res["pair"], res["estimate"]
        if value is not None:
            estimate.publish(value.center_x, value.distance)
            last_hit = res

        current = estimate.read()
        results.append({
            "frame": n,
            "contours": len(contours),
            "found": value is not None,
            "pair": [pair.index1, pair.index2] if pair is not None else None,
            "score": round(pair.total, 2) if pair is not None else None,
            "center_x": current.center_x,
            "distance": current.distance,
        })
        logger.debug(f"Frame {n}: {results[-1]}")

    return results, last_hit


def main(argv=None):
    argv = sys.argv if argv is None else argv
    args = list(argv[1:])
    show = "--show" in args
    debug = "--debug" in args
    image_path: Optional[str] = None
    if "--image" in args:
        i = args.index("--image")
        if i + 1 >= len(args):
            print(USAGE)
            sys.exit(2)
        image_path = args[i + 1]
        del args[i:i + 2]
    args = [a for a in args if a not in ("--show", "--debug")]

    if len(args) != 1:
        print(USAGE)
        sys.exit(2)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    in_path = args[0]
    frames, config = load_frames(in_path)

    os.makedirs("outputs", exist_ok=True)
    base = os.path.splitext(os.path.basename(in_path))[0]
    json_path = os.path.join("outputs", f"{base}.json")
    vis_path = os.path.join("outputs", f"{base}.jpg")

    results, last_hit = replay(frames, config)
    hits = sum(1 for r in results if r["found"])
    logger.info(f"{hits} of {len(results)} frame(s) had a target")

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump({"frames": results}, f, ensure_ascii=False, indent=2)
    print(f"[OK] Wrote JSON to: {json_path}")

    if image_path is not None:
        img = cv2.imread(image_path, cv2.IMREAD_COLOR)
        if img is None:
            raise FileNotFoundError(f"Cannot read image: {image_path}")

        from .visualize import draw_target_on_image
        vis = draw_target_on_image(img, last_hit["pair"], last_hit["estimate"])
        ok = cv2.imwrite(vis_path, vis)
        if not ok:
            raise RuntimeError(f"Failed to write image: {vis_path}")
        print(f"[OK] Wrote visualization to: {vis_path}")

        if show:
            from .visualize import show_image
            show_image(vis, title=f"{base} (last target)")


if __name__ == "__main__":
    main()
