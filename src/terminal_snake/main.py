# main.py
import logging
import signal
import sys

from .config import Config
from .game import Game, ShutdownFlag
from .highscores import HighScoreStore
from .input_handler import make_input
from .renderer import make_renderer

logger = logging.getLogger(__name__)


def setup_logging(cfg: Config) -> None:
    # the terminal belongs to the renderer, so log to a file
    logging.basicConfig(
        filename=cfg.log_file,
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def main() -> int:
    """Run the game; return 0 on quit, 1 on error, or the signal number on interrupt."""
    shutdown = ShutdownFlag()
    signal.signal(signal.SIGINT, shutdown.request)

    game = None
    try:
        cfg = Config.from_env()
        setup_logging(cfg)
        renderer = make_renderer(cfg.backend)
        game = Game(
            renderer=renderer,
            input_handler=make_input(cfg.backend, renderer),
            store=HighScoreStore(cfg.high_score_path),
            config=cfg,
            shutdown=shutdown,
        )
        game.initialize()
        game.run()
    except Exception as e:
        if game is not None:
            game.cleanup()
        logger.exception("Uncaught error")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    game.cleanup()
    if shutdown.requested:
        return shutdown.signum
    return 0


if __name__ == "__main__":
    sys.exit(main())
