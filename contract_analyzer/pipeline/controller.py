"""
Pipeline controller: runs one contract analysis at a time.

Stage order: read file → extract text → upload → decode. Every accepted
start ends in exactly one terminal state (SUCCEEDED or FAILED), whichever
stage fails.
"""

import asyncio
from typing import Callable, List, Optional

import structlog

from contract_analyzer.analysis.client import AnalysisClient
from contract_analyzer.documents.extractor import PdfTextExtractor
from contract_analyzer.documents.models import SelectedFile
from contract_analyzer.exceptions import AnalysisError, ErrorKind, ExtractionFailure

from .models import PipelineError, PipelineState, PipelineStatus
from .status import can_start, validate_transition

logger = structlog.get_logger("pipeline")

StateListener = Callable[[PipelineState], None]


class PipelineController:
    """
    Owns the PipelineState and the at-most-one-in-flight rule.

    The UI subscribes to state changes and calls ``start_analysis`` from its
    event handlers. No locks are needed: the guard and the first transition
    happen synchronously, before any await.
    """

    def __init__(
        self,
        client: AnalysisClient,
        extractor: Optional[PdfTextExtractor] = None,
    ):
        self.client = client
        self.extractor = extractor or PdfTextExtractor()
        self._state = PipelineState()
        self._listeners: List[StateListener] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state.is_busy

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a state listener.

        Returns:
            A callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def start_analysis(self, selected_file: SelectedFile) -> Optional["asyncio.Task[PipelineState]"]:
        """
        Start analyzing ``selected_file``.

        Ignored (returns None) while an analysis is in flight. Starting from a
        terminal state counts as an explicit retry and resets to IDLE first.
        Must be called from a running event loop.

        Returns:
            The task driving the analysis, resolving to the final state
        """
        if not can_start(self._state.status):
            logger.info(
                "start_analysis ignored: analysis in flight",
                status=self._state.status.value,
                requested=selected_file.name,
            )
            return None

        loop = asyncio.get_running_loop()

        if self._state.is_terminal:
            self._transition(PipelineState())
        self._transition(PipelineState.extracting(selected_file.name))

        self._task = loop.create_task(self._run(selected_file))
        return self._task

    async def run_analysis(self, selected_file: SelectedFile) -> PipelineState:
        """Start an analysis and wait for it to settle."""
        task = self.start_analysis(selected_file)
        if task is None:
            return self._state
        return await task

    def reset(self) -> None:
        """Return a finished controller to IDLE (user picked a new file)."""
        if self._state.status == PipelineStatus.IDLE:
            return
        validate_transition(self._state.status, PipelineStatus.IDLE)
        self._transition(PipelineState())

    async def _run(self, selected_file: SelectedFile) -> PipelineState:
        file_name = selected_file.name
        try:
            file_bytes = self._read(selected_file)
            extracted = await self.extractor.extract_async(file_bytes)
            # Extracted text only gates the upload; the original bytes are sent
            logger.info(
                "Text extracted",
                file=file_name,
                pages=extracted.page_count,
                words=extracted.word_count,
                title=extracted.title,
                author=extracted.author,
            )

            self._transition(PipelineState.uploading(file_name))
            result = await self.client.analyze(file_bytes, file_name)

        except AnalysisError as e:
            logger.warning(
                "Analysis failed",
                file=file_name,
                kind=e.kind.value,
                reason=e.reason,
            )
            self._fail(file_name, PipelineError.from_exception(e))
        except asyncio.CancelledError:
            self._fail(file_name, PipelineError(kind=ErrorKind.UNEXPECTED, reason="Analysis was cancelled"))
            raise
        except Exception as e:
            logger.exception("Unexpected pipeline error", file=file_name)
            self._fail(
                file_name,
                PipelineError(kind=ErrorKind.UNEXPECTED, reason=f"Unexpected error: {e}"),
            )
        else:
            self._transition(PipelineState.succeeded(file_name, result))

        return self._state

    @staticmethod
    def _read(selected_file: SelectedFile) -> bytes:
        try:
            return selected_file.read_bytes()
        except OSError as e:
            raise ExtractionFailure(
                f"Failed to extract text from PDF: cannot read {selected_file.name}: {e}",
                cause=e,
            ) from e

    def _fail(self, file_name: str, error: PipelineError) -> None:
        if self._state.is_busy:
            self._transition(PipelineState.failed(file_name, error))

    def _transition(self, new_state: PipelineState) -> None:
        validate_transition(self._state.status, new_state.status)
        old = self._state
        self._state = new_state

        logger.debug(
            "Pipeline transition",
            from_status=old.status.value,
            to_status=new_state.status.value,
            file=new_state.file_name,
        )

        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed", status=new_state.status.value)
