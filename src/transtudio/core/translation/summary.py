"""Assembly and reporting of per-run translation summaries."""

from typing import Optional

import structlog

from transtudio.core.cost import combined_cost, round_cost
from transtudio.core.types import ModelEntry, TranslationSummary
from transtudio.utils.language import TargetLanguage
from transtudio.utils.logging import get_logger


class SummaryReporter:
    """Builds the final usage record of a run and hands it to the logs."""

    def __init__(self, logger: Optional[structlog.BoundLogger] = None) -> None:
        self._logger = logger or get_logger(__name__)

    def build(
        self,
        *,
        model: ModelEntry,
        target_language: TargetLanguage,
        input_tokens: int,
        output_tokens: int,
        duration_ms: int,
        page_count: int,
    ) -> TranslationSummary:
        """Create the summary, pricing the tokens at the model's rates.

        The cost is rounded to six decimals here and nowhere earlier.
        """
        return TranslationSummary(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost=round_cost(combined_cost(input_tokens, output_tokens, model)),
            duration_ms=max(0, duration_ms),
            page_count=page_count,
            model_label=model.label,
            target_language=target_language,
        )

    def emit(
        self,
        summary: TranslationSummary,
        *,
        document_id: str,
        model_id: str,
    ) -> None:
        """Log a completed run with every summary field."""
        self._logger.info(
            "translation completed",
            document_id=document_id,
            model_id=model_id,
            **summary.model_dump(mode="json"),
        )
