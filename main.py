"""
Air Postcard - Gesture Drawing from a Webcam

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


KEY_HELP = "Keys: u=undo  r=redo  c=clear  q=quit"


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Air Postcard - draw with your index finger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Gestures: index finger up = draw, index+middle up = erase, "
            "fist = pause.\n" + KEY_HELP
        ),
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device id (overrides config)",
    )

    parser.add_argument(
        "--color",
        default=None,
        help="Brush color as #rrggbb (overrides config)",
    )

    parser.add_argument(
        "--size",
        type=float,
        default=None,
        help="Base brush size (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera feed with landmark overlay behind the canvas",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def draw_status(frame, pipeline):
    """Overlay current mode and history counters."""
    import cv2

    history = pipeline.history
    lines = [
        f"Mode: {pipeline.mode.name}",
        f"Strokes: {len(history)}  undo:{'y' if history.can_undo() else 'n'}"
        f"  redo:{'y' if history.can_redo() else 'n'}",
    ]
    for i, line in enumerate(lines):
        cv2.putText(
            frame, line, (10, 30 + i * 25),
            cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2
        )
    return frame


def run(config, debug: bool = False) -> int:
    """
    Run the camera loop: track, draw, and show the canvas.
    """
    import cv2
    import numpy as np
    from drawing import DrawingPipeline
    from tracking.hand_tracker import HandTracker

    tracker = HandTracker(config)
    pipeline = DrawingPipeline(config)

    if not tracker.start():
        print("ERROR: Could not start hand tracking")
        return 1

    print(KEY_HELP)
    print("-" * 40)

    blank = np.full((config.canvas.height, config.canvas.width, 3), 245, dtype=np.uint8)

    try:
        while True:
            landmarks = tracker.get_landmarks()
            state = pipeline.process(landmarks)

            if state.committed is not None:
                logging.getLogger(__name__).info(
                    "Committed %s stroke (%d points)",
                    state.committed.compositing.value, len(state.committed.points),
                )

            if debug:
                background = tracker.get_frame_with_landmarks(landmarks)
                if background is None:
                    background = blank
            else:
                background = blank

            view = pipeline.renderer.composite_over(background)
            cv2.imshow("Air Postcard", draw_status(view, pipeline))

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('u'):
                pipeline.undo()
            elif key == ord('r'):
                pipeline.redo()
            elif key == ord('c'):
                pipeline.clear()

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    from tracking import load_config, ConfigError
    from dataclasses import replace

    try:
        config = load_config(args.config)

        # Apply CLI overrides (replace() re-runs validation)
        if args.camera is not None:
            config.camera.device_id = args.camera
        if args.color is not None or args.size is not None:
            brush = config.brush
            config.brush = replace(
                brush,
                color=args.color if args.color is not None else brush.color,
                base_size=args.size if args.size is not None else brush.base_size,
            )
    except ConfigError as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    print("Air Postcard starting...")
    print(f"  Camera: {config.camera.device_id}")
    print(f"  Canvas: {config.canvas.width}x{config.canvas.height}")
    print(f"  Brush: {config.brush.color} / {config.brush.base_size}")
    print(f"  Debug: {args.debug}")
    print()

    return run(config, debug=args.debug)


if __name__ == "__main__":
    sys.exit(main())
