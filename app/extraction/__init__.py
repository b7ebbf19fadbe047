from app.extraction.ai_extractor import AIExtractor
from app.extraction.base import BaseESGExtractor
from app.extraction.factory import ExtractorFactory
from app.extraction.health_check import HealthCheck
from app.extraction.heuristic_extractor import HeuristicExtractor
from app.extraction.models import ESGExtractionResult, ExtractionStrategy, Metric

__all__ = [
    "AIExtractor",
    "BaseESGExtractor",
    "ESGExtractionResult",
    "ExtractionStrategy",
    "ExtractorFactory",
    "HealthCheck",
    "HeuristicExtractor",
    "Metric",
]
