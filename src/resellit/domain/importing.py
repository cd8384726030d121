"""Import state handling shared by the CSV importers."""

import logging
from typing import Callable

from resellit.domain.entities import (
    ImportFailed,
    ImportResult,
    ImportRunning,
    ImportState,
    ImportSucceeded,
)

logger = logging.getLogger(__name__)


def run_import(
    import_csv: Callable[[str], ImportResult],
    source: str,
    on_state: Callable[[ImportState], None] = lambda state: None,
) -> ImportState:
    """Run an import and reduce its outcome to a final state value.

    Structural failures (the file is missing, unreadable or rejected before
    any row is processed) become ImportFailed. Everything else, including
    files where every row was skipped, is ImportSucceeded.

    Args:
        import_csv: Bound import method, e.g. ProductImportService.import_csv
        source: Path of the file to import
        on_state: Called with each intermediate state

    Returns:
        ImportSucceeded or ImportFailed
    """
    on_state(ImportRunning(source=source))
    try:
        result = import_csv(source)
    except (ValueError, FileNotFoundError, UnicodeDecodeError) as e:
        logger.warning("Import of %s failed: %s", source, e)
        state: ImportState = ImportFailed(reason=str(e))
    else:
        logger.info("Import of %s finished: %s", source, result.summary())
        state = ImportSucceeded(result=result)
    on_state(state)
    return state
