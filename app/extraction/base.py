from abc import ABC, abstractmethod

from app.extraction.models import ESGExtractionResult, ExtractionStrategy


class BaseESGExtractor(ABC):
    """Contract for every text -> ESGExtractionResult strategy."""

    strategy: ExtractionStrategy

    @abstractmethod
    def extract(self, text: str) -> ESGExtractionResult:
        """Extract ESG metrics from plain text.

        Args:
            text: Plain text produced by a text extractor.

        Returns:
            ESGExtractionResult with every leaf key present.

        Raises:
            ExtractionError: when the strategy cannot produce a result at all.
        """
