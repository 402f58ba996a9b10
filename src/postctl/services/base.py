"""BaseService — abstract foundation for postctl services.

Every service receives the frozen :class:`PostSettings` at construction
time. Services never raise for expected failures: a
:class:`~postctl.domain.errors.CorpusError` becomes a failed
:class:`ServiceResult` via :meth:`BaseService._fail`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from postctl.services.result import ServiceResult

if TYPE_CHECKING:
    from postctl.config.settings import PostSettings
    from postctl.domain.errors import CorpusError

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class CorpusService(BaseService):
            def build(self, input_dir: Path) -> ServiceResult:
                try:
                    index = self.load_index(input_dir)
                except CorpusError as exc:
                    return self._fail("build", exc)
                ...
    """

    def __init__(self, settings: PostSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> PostSettings:
        return self._settings

    @staticmethod
    def _fail(op: str, exc: CorpusError, **detail: Any) -> ServiceResult:
        """Translate a corpus error into a failed result."""
        logger.debug("%s failed: %s", op, exc)
        if exc.path:
            detail.setdefault("path", exc.path)
        return ServiceResult.failure(op, exc.code, str(exc), **detail)
