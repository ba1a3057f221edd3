import logging
from pathlib import Path
from typing import Iterable, Optional

from .types import GenerationResult


LOGGER_NAME = 'iconwolf'


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    if log.handlers:
        return log
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    fmt = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    log.addHandler(sh)
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding='utf-8')
        fh.setFormatter(fmt)
        log.addHandler(fh)
        log.info('Logging to %s', log_file)
    return log


def _kb(size: int) -> str:
    return f'{size / 1024:.1f} KB'


def log_generated(result: GenerationResult) -> None:
    logging.getLogger(LOGGER_NAME).info(
        'generated %s (%dx%d, %s)', result.file_path, result.width, result.height, _kb(result.size))


def log_summary(results: Iterable[GenerationResult]) -> None:
    results = list(results)
    total = sum(r.size for r in results)
    logging.getLogger(LOGGER_NAME).info(
        '%d file%s generated (%s total)', len(results), '' if len(results) == 1 else 's', _kb(total))


def log_update_notice(current: str, latest: str) -> None:
    logging.getLogger(LOGGER_NAME).warning(
        'Update available: %s -> %s (pip install -U iconwolf)', current, latest)
