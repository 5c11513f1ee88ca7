# pyumlviz/utils.py

import os
import logging
import sys

logger = logging.getLogger('pyumlviz')


def setup_logging(log_level=logging.INFO, stream=None):
    """Sets up the logging configuration."""
    logger = logging.getLogger('pyumlviz')
    logger.setLevel(log_level)

    stream = stream or sys.stdout
    stream_handlers = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    if stream_handlers:
        # later calls redirect the existing handler instead of stacking another
        for handler in stream_handlers:
            handler.setStream(stream)
    else:
        handler = logging.StreamHandler(stream)
        formatter = logging.Formatter('[%(levelname)s] %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_python_files(target_path, recursive=False):
    """
    Lists the Python files to analyse.

    A file target is returned as is. For a directory only its own files are
    listed unless ``recursive`` is set. A missing target is reported and yields
    an empty list.
    """
    if not os.path.exists(target_path):
        logger.error(f"'{target_path}' does not exist")
        return []

    if os.path.isfile(target_path):
        return [target_path]

    python_files = []
    for root, dirs, files in os.walk(target_path):
        dirs.sort()
        for file in sorted(files):
            if file.endswith('.py'):
                python_files.append(os.path.join(root, file))
        if not recursive:
            break
    return python_files
