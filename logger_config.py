import logging
import os

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

def setup_logging(diagnostic: bool = False, log_dir: str = 'logs'):
    """Configure logging for all modules"""
    os.makedirs(log_dir, exist_ok=True)

    # Set level based on --diagnostic flag
    base_level = logging.DEBUG if diagnostic else logging.INFO

    # Clear any existing handlers from the root logger
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    file_handler = logging.FileHandler(os.path.join(log_dir, 'app.log'))
    file_handler.setLevel(base_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    handlers = [
        file_handler  # Always log to file
    ]

    # Add console handler only in diagnostic mode
    if diagnostic:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(base_level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(console_handler)

    logging.basicConfig(
        level=base_level,
        handlers=handlers
    )

    loggers = {
        'main': logging.getLogger('main'),
        'api': logging.getLogger('api'),
        'name_matcher': logging.getLogger('name_matcher'),
        'initials': logging.getLogger('initials_generator'),
        'scoring': logging.getLogger('scoring'),
        'session_store': logging.getLogger('session_store'),
        'people_catalog': logging.getLogger('people_catalog'),
        'hint_generator': logging.getLogger('hint_generator'),
        'game_service': logging.getLogger('game_service'),
        'wikipedia_agent': logging.getLogger('wikipedia_agent'),
        'config': logging.getLogger('main_config'),
    }

    for logger in loggers.values():
        logger.setLevel(base_level)

    return loggers


def flush_logs():
    """Flush all handlers attached to the root logger."""
    for handler in logging.getLogger().handlers:
        handler.flush()
