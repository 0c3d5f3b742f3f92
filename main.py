"""
HandMorph - Gesture-Driven Particle Morphing

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HandMorph - particle shapes controlled by hand gestures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--template",
        choices=["sphere", "heart", "flower", "saturn", "firework"],
        default=None,
        help="Starting template (overrides config)",
    )

    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of particles (overrides config)",
    )

    parser.add_argument(
        "--no-preview",
        action="store_true",
        help="Hide the hand skeleton preview",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run an OpenCV window showing landmarks and gesture signals",
    )

    return parser.parse_args()


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks and signals.
    Useful for tuning gains without the particle view.
    """
    import cv2
    from webcam import GestureExtractor, OrientationDebouncer
    from webcam.hand_tracker import HandTracker, draw_skeleton
    from particles import TemplateCatalog

    tracker = HandTracker(config)
    extractor = GestureExtractor(config.gestures)
    debouncer = OrientationDebouncer(config.gestures.orientation_dwell_ms)
    catalog = TemplateCatalog()
    catalog.jump_to(config.morph.initial_template)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracking")
        return 1

    try:
        while True:
            landmarks = tracker.get_landmarks()
            state = extractor.update(landmarks)
            if debouncer.update(state.orientation):
                print(f"[{tracker.frame_count:5d}] Template -> {catalog.advance().name}")

            frame = tracker.get_frame_with_landmarks()
            if frame is not None:
                if landmarks is not None:
                    draw_skeleton(frame, landmarks)

                info_lines = [
                    f"Template: {catalog.current.name}",
                    f"Pinch: {state.pinch:.2f}",
                    f"Openness: {state.openness:.2f}",
                    f"Depth: {state.depth:.2f}",
                    f"Facing: {state.orientation.value}",
                ]
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 30 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                cv2.imshow("HandMorph Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config):
    """Run HandMorph with the particle window (capture on a worker thread)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from webcam import LandmarkChannel
    from webcam.worker import WebcamWorker
    from particles import ParticleScene
    from ui import MainWindow

    app = QApplication(sys.argv)

    channel = LandmarkChannel()
    scene = ParticleScene.from_config(config, channel=channel)

    window = MainWindow(scene, config)
    window.show()

    # Setup background worker and thread
    thread = QThread()
    worker = WebcamWorker(config, channel)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Use QueuedConnection so preview updates happen in the main thread
    thread.started.connect(worker.start_process)
    worker.frame_ready.connect(window.view.set_webcam_frame, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)

    return result


def main():
    """Main entry point."""
    args = parse_args()

    from webcam import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.template:
        config.morph.initial_template = args.template
    if args.count is not None:
        if args.count <= 0:
            print("ERROR: --count must be positive")
            return 2
        config.morph.count = args.count
    if args.no_preview:
        config.ui.show_preview = False

    print("HandMorph starting...")
    print(f"  Template: {config.morph.initial_template}")
    print(f"  Particles: {config.morph.count}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config)


if __name__ == "__main__":
    sys.exit(main())
