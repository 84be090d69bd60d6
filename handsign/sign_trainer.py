"""
Live Hand Sign Trainer.

Teach letters by showing a pose and pressing its key, then watch the
kNN recognizer classify new poses in real time. The dataset is saved after
every change and restored on the next start.
"""

import argparse
import logging
import time
from pathlib import Path

import cv2

from .dataset.storage import JsonFileStorage
from .hand_gestures.config import (
    CAMERA_HEIGHT, CAMERA_WIDTH, DEFAULT_DATASET_PATH, DEFAULT_EXPORT_PATH,
    MAX_NUM_HANDS, PROCESS_FLIP, TRACK_HAND, TrackSide,
)
from .hand_tracks import HandTracker, TrackerDisplay
from .keymap import HELP, KeyAction, handle_key
from .service import SignRecognizer


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


def _export(recognizer: SignRecognizer, path: Path) -> None:
    text = recognizer.export_snapshot(indent=2)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        recognizer.status = f"Export failed - {e.strerror or e}"
        print(f"[{_timestamp()}] Export to {path} failed: {e}")
        return
    print(f"[{_timestamp()}] Exported {recognizer.total_count()} examples -> {path.resolve()}")


def _import(recognizer: SignRecognizer, path: Path | None) -> None:
    if path is None:
        recognizer.status = "Import cancelled (no --import-file given)"
        return
    try:
        payload = path.read_bytes()
    except OSError as e:
        recognizer.status = f"Import failed - {e.strerror or e}"
        print(f"[{_timestamp()}] Import from {path} failed: {e}")
        return
    if recognizer.import_snapshot(payload):
        print(f"[{_timestamp()}] Imported {recognizer.total_count()} examples <- {path}")
    else:
        print(f"[{_timestamp()}] {recognizer.status}")


def run_sign_trainer(
    camera_index: int = 0,
    dataset_path: Path = DEFAULT_DATASET_PATH,
    track_side: TrackSide = TRACK_HAND,
    selfie: bool = PROCESS_FLIP,
    export_path: Path = DEFAULT_EXPORT_PATH,
    import_path: Path | None = None,
) -> None:
    """
    Run the live trainer.

    Args:
        camera_index: Camera device index
        dataset_path: Where the working dataset is persisted
        track_side: Which hand to follow when two are visible
        selfie: Mirror the camera image (webcam facing the user)
        export_path: Target file for the export key
        import_path: Source file for the import key
    """
    print(HELP)

    recognizer = SignRecognizer(storage=JsonFileStorage(dataset_path), track_side=track_side)
    recognizer.load()
    print(f"[{_timestamp()}] {recognizer.status}")

    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        print(f"Error: Cannot open camera {camera_index}")
        return

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)

    last_status = recognizer.status
    try:
        with HandTracker(max_num_hands=MAX_NUM_HANDS) as tracker, TrackerDisplay() as display:
            while True:
                ok, frame = cap.read()
                if not ok:
                    continue
                if selfie:
                    frame = cv2.flip(frame, 1)

                recognizer.on_hands(tracker.process(frame))
                result = recognizer.tick()

                hud = [
                    "REC ON" if recognizer.record.enabled else "REC OFF",
                    f"predict {'ON' if recognizer.predicting else 'OFF'}",
                    f"hand {'yes' if result.features is not None else 'no'}",
                    f"ex {recognizer.total_count()}",
                ]
                display.render(frame, result.hand, result.smoothed, hud, recognizer.status)

                action = handle_key(recognizer, display.show(frame))
                if action is KeyAction.QUIT:
                    break
                if action is KeyAction.EXPORT:
                    _export(recognizer, export_path)
                elif action is KeyAction.IMPORT:
                    _import(recognizer, import_path)

                if recognizer.status != last_status:
                    last_status = recognizer.status
                    print(f"[{_timestamp()}] {last_status}")
    finally:
        cap.release()
        cv2.destroyAllWindows()


def main() -> None:
    parser = argparse.ArgumentParser(description="Live Hand Sign Trainer")
    parser.add_argument("-c", "--camera", type=int, default=0, help="Camera index")
    parser.add_argument("--dataset", type=Path, default=DEFAULT_DATASET_PATH, help="Working dataset file")
    parser.add_argument("--track-hand", choices=["left", "right"], default=TRACK_HAND.value.lower(),
                        help="Hand to follow when two are visible")
    parser.add_argument("--no-selfie", action="store_true", help="Do not mirror the camera image")
    parser.add_argument("--export", type=Path, default=DEFAULT_EXPORT_PATH, help="Export target file")
    parser.add_argument("--import-file", type=Path, default=None, help="Dataset JSON to load with the import key")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    run_sign_trainer(
        camera_index=args.camera,
        dataset_path=args.dataset,
        track_side=TrackSide.LEFTMOST if args.track_hand == "left" else TrackSide.RIGHTMOST,
        selfie=not args.no_selfie,
        export_path=args.export,
        import_path=args.import_file,
    )


if __name__ == "__main__":
    main()
