"""
SwipeKeys - Swipe Text Entry for Assistive Communication

Entry point for the command-line host.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger("swipekeys")

HELP_TEXT = """Commands:
  swipe DX DY    swipe by (DX, DY); y grows downward
  tap K          tap zone K
  back           backspace
  clear          clear word and sentence
  pick N         commit candidate N
  commit         commit the top candidate
  say            complete the sentence
  layout NAME    keys4, keys6, keys8, strokes2 or msr
  engine NAME    custom, native or hybrid
  quit           exit"""


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SwipeKeys - Swipe Text Entry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_TEXT,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--layout",
        choices=["keys4", "keys6", "keys8", "strokes2", "msr"],
        default=None,
        help="Keyboard layout (overrides config)",
    )

    parser.add_argument(
        "--engine",
        choices=["custom", "native", "hybrid"],
        default=None,
        help="Prediction engine (overrides config)",
    )

    parser.add_argument(
        "--vocab",
        type=Path,
        default=None,
        help="Word frequency list, CSV or JSON (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args()


def start_vocabulary_load(session, path: Path):
    """
    Load a vocabulary in the background into every engine.
    Returns the worker, the QThread running it and the Qt application.
    """
    from prediction.engine import EngineType
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from prediction.worker import VocabularyWorker

    # Hybrid engine writes through to the custom and native engines
    engine = session.registry.get(EngineType.HYBRID)
    if engine is None:
        engine = session.registry.active_engine
    worker = VocabularyWorker(engine, path=path)

    def handle_finished(result):
        logger.info("Vocabulary ready: %d words (%d rejected)%s",
                    result.report.inserted, len(result.report.rejected),
                    ", superseded" if result.superseded else "")

    worker.finished.connect(handle_finished, Qt.DirectConnection)
    worker.word_rejected.connect(lambda word, char: logger.debug("Rejected %r (%r)", word, char), Qt.DirectConnection)
    worker.error.connect(lambda msg: logger.error("WORKER ERROR: %s", msg), Qt.DirectConnection)

    # The REPL blocks the main thread, so slots run directly on the worker thread
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    thread = QThread()
    worker.moveToThread(thread)
    thread.started.connect(worker.start_process)
    worker.finished.connect(lambda result: thread.quit(), Qt.DirectConnection)
    worker.error.connect(lambda msg: thread.quit(), Qt.DirectConnection)
    thread.start()
    return worker, thread, app


def print_update(session, update):
    """Print the session state after a command."""
    if update.marker is not None:
        print(f"  marker:     {update.marker.arrow}")
    if update.action is not None:
        print(f"  action:     {update.action.name}")
    if update.committed:
        print(f"  committed:  {update.committed}")
    if update.completed is not None:
        print(f"  spoken:     {update.completed.text}")
    markers = "".join(d.arrow for d in session.key_markers())
    print(f"  keys:       {update.keys} {markers}")
    print(f"  word:       {update.current_word}{'  (no match)' if update.unresolved else ''}")
    print(f"  candidates: {', '.join(f'{i}:{w}' for i, w in enumerate(update.words))}")
    print(f"  sentence:   {update.sentence}")
    if session.layout.is_menu:
        labels = [label.replace("\n", " ") for label in session.menu_labels()]
        print(f"  menu:       {' | '.join(labels)}")


def handle_command(session, line: str):
    """
    Run one command line.

    Returns:
        The session update, or None for commands without one.

    Raises:
        ValueError: If the command or its arguments are invalid.
    """
    parts = line.split()
    command, args = parts[0].lower(), parts[1:]

    if command == "swipe" and len(args) == 2:
        return session.swipe(float(args[0]), float(args[1]))
    if command == "tap" and len(args) == 1:
        return session.tap(int(args[0]))
    if command == "back":
        return session.backspace()
    if command == "clear":
        return session.clear()
    if command == "pick" and len(args) == 1:
        return session.select_candidate(int(args[0]))
    if command == "commit":
        return session.commit()
    if command == "say":
        return session.complete_sentence()
    if command == "layout" and len(args) == 1:
        return session.set_layout(args[0])
    if command == "engine" and len(args) == 1:
        if not session.registry.switch_to(args[0]):
            print(f"Engine {args[0]!r} is not available")
        else:
            engine_type = session.registry.active_type
            print(f"Engine: {engine_type.display_name} - {engine_type.description}")
        return None
    raise ValueError(f"Unknown command: {line}")


def run_repl(session):
    """Read commands from stdin until 'quit' or EOF."""
    print(HELP_TEXT)
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break

        try:
            update = handle_command(session, line)
        except ValueError as e:
            print(f"ERROR: {e}")
            continue
        if update is not None:
            print_update(session, update)

    metrics = session.registry.metrics()
    if metrics is not None:
        print(f"Queries: {metrics.query_count}, "
              f"avg {metrics.average_response_time * 1000:.2f} ms, "
              f"cache hit rate {metrics.cache_hit_rate:.0%}")
    return 0


def main():
    """Main entry point."""
    args = parse_args()

    # Load config
    from session import InputSession, load_config
    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"ERROR: Invalid config: {e}")
        return 1

    # Apply CLI overrides
    if args.layout:
        config.keyboard.layout = args.layout
    if args.engine:
        config.prediction.engine = args.engine
    if args.vocab:
        config.prediction.vocabulary_path = str(args.vocab)

    level = logging.DEBUG if args.debug else getattr(logging, config.logging.level.upper())
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    print("SwipeKeys starting...")
    print(f"  Layout: {config.keyboard.layout}")
    print(f"  Engine: {config.prediction.engine}")
    print(f"  Debug: {args.debug}")
    print()

    session = InputSession.from_config(config)

    worker = thread = None
    if config.prediction.vocabulary_path:
        vocab_path = Path(config.prediction.vocabulary_path)
        if not vocab_path.is_absolute():
            vocab_path = Path(__file__).parent / vocab_path
        worker, thread, _app = start_vocabulary_load(session, vocab_path)

    try:
        return run_repl(session)
    finally:
        if worker is not None:
            worker.stop_process()
            thread.quit()
            thread.wait(2000)


if __name__ == "__main__":
    sys.exit(main())
