"""Hand Seals CLI — webcam demo, jutsu lookup, and environment info.

Usage:
    python -m seals demo --camera 0 --catalogue data/jutsu.json
    python -m seals match Tiger Ram Snake --catalogue data/jutsu.json
    python -m seals info
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from app.config import settings
from app.logging_config import setup_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="seals",
        description="Hand Seals — real-time two-hand seal recognition",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- demo ----
    demo_parser = subparsers.add_parser("demo", help="Run real-time webcam seal detection")
    demo_parser.add_argument("--camera", type=int, default=settings.camera_index, help="Camera device index")
    demo_parser.add_argument("--catalogue", type=str, default=None, help="Path to jutsu catalogue JSON")
    demo_parser.add_argument("--no-mirror", action="store_true", help="Do not mirror camera frames")

    # ---- match ----
    match_parser = subparsers.add_parser("match", help="List jutsus that use the given seals")
    match_parser.add_argument("seals", nargs="*", help="Seal names, e.g. Tiger Ram Snake")
    match_parser.add_argument("--catalogue", type=str, default=None, help="Path to jutsu catalogue JSON")

    # ---- info ----
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args(argv)
    setup_logging(log_to_file=args.command == "demo")

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "match":
        cmd_match(args)
    elif args.command == "info":
        cmd_info()


def _load_catalogue(path: str | None):
    from handseal.catalogue import JutsuCatalogue
    from handseal.errors import CatalogueError

    try:
        return JutsuCatalogue.load(path or settings.catalogue_path)
    except CatalogueError as exc:
        logger.warning(f"{exc}. Continuing without jutsu lookup.")
        return None


def cmd_demo(args: argparse.Namespace) -> None:
    """Run real-time webcam demo."""
    import cv2

    from handseal.inference.detector import HandSealDetector
    from handseal.temporal.sequence_tracker import SealSequenceTracker
    from handseal.vision.frames import FrameConfig
    from handseal.vision.source import MediaPipeHandSource

    catalogue = _load_catalogue(args.catalogue)
    detector = HandSealDetector(debug_log_interval_s=settings.debug_log_interval_s)
    tracker = SealSequenceTracker(
        hold_seconds=settings.confirmation_hold_s,
        confidence_threshold=settings.confirmation_threshold,
    )
    frame_config = FrameConfig(mirror=settings.mirror_input and not args.no_mirror)

    with MediaPipeHandSource(
        min_detection_confidence=settings.min_detection_confidence,
        min_tracking_confidence=settings.min_tracking_confidence,
        frame_config=frame_config,
    ) as source:
        cap = cv2.VideoCapture(args.camera)
        if not cap.isOpened():
            logger.error(f"Cannot open camera {args.camera}")
            sys.exit(1)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, settings.camera_width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, settings.camera_height)

        logger.info("Press 'q' to quit, 'c' to clear the seal sequence")

        try:
            while True:
                ret, frame = cap.read()
                if not ret:
                    break

                hands = source.detect(frame)
                result = detector.detect(hands)
                if tracker.update(result) is not None and catalogue is not None:
                    names = [j.name for j in catalogue.match(tracker.sequence)]
                    logger.info(f"{len(names)} matching jutsus: {', '.join(names[:5])}")

                annotated = source.draw_landmarks(frame)

                # Info overlay
                y_offset = 30
                cv2.putText(
                    annotated,
                    f"Hands: {len(hands)} | Tracking: {source.last_inference_ms:.1f}ms",
                    (10, y_offset),
                    cv2.FONT_HERSHEY_SIMPLEX,
                    0.7,
                    (0, 255, 0),
                    2,
                )

                if result.seal is not None:
                    y_offset += 35
                    color = (0, 255, 0) if result.confidence > 0.8 else (0, 255, 255)
                    cv2.putText(
                        annotated,
                        f"{result.name}: {result.confidence:.0%}",
                        (10, y_offset),
                        cv2.FONT_HERSHEY_SIMPLEX,
                        0.8,
                        color,
                        2,
                    )

                if tracker.sequence:
                    y_offset += 35
                    cv2.putText(
                        annotated,
                        " > ".join(s.value for s in tracker.sequence),
                        (10, y_offset),
                        cv2.FONT_HERSHEY_SIMPLEX,
                        0.7,
                        (241, 102, 99),
                        2,
                    )

                cv2.imshow(settings.app_name, annotated)
                key = cv2.waitKey(1) & 0xFF
                if key == ord("q"):
                    break
                if key == ord("c"):
                    tracker.reset()
                    detector.reset()
                    logger.info("Seal sequence cleared")
        finally:
            cap.release()
            cv2.destroyAllWindows()


def cmd_match(args: argparse.Namespace) -> None:
    """Print jutsus that use every given seal."""
    from handseal.types import Seal

    try:
        seals = [Seal.from_name(name) for name in args.seals]
    except ValueError as exc:
        logger.error(str(exc))
        sys.exit(2)

    catalogue = _load_catalogue(args.catalogue)
    if catalogue is None:
        sys.exit(1)

    matches = catalogue.match(seals)
    print(f"\n=== {len(matches)} jutsus using: {', '.join(s.value for s in seals) or 'any seal'} ===")
    for jutsu in matches:
        print(f"  {jutsu.name:<40} {' > '.join(jutsu.hand_seals)}")


def cmd_info() -> None:
    """Show system information."""
    import platform

    import numpy as np

    from handseal import __version__

    try:
        import cv2
        cv_ver = cv2.__version__
    except ImportError:
        cv_ver = "not installed"

    try:
        import mediapipe as mp
        mp_ver = mp.__version__
    except ImportError:
        mp_ver = "not installed (pip install '.[vision]')"

    print(f"""
{settings.app_name} {__version__}
══════════════════════════════════════════════
  Python:       {platform.python_version()}
  Platform:     {platform.system()} {platform.machine()}
  NumPy:        {np.__version__}
  OpenCV:       {cv_ver}
  MediaPipe:    {mp_ver}
  Catalogue:    {settings.catalogue_path}
""")


if __name__ == "__main__":
    main()
