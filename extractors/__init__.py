from .base_extractor import BaseExtractor, RowExtractor
from .case_ref import CaseRefExtractor
from .combined_claim import CaseAccumulator, CombinedClaimExtractor, CombinedState
from .possession_schedule import PossessionScheduleExtractor
from .simple_claim import SimpleClaimExtractor
from .hearing_list import EXTRACTORS, HearingListParser
from .batch import BatchSummary, classify_batch, list_input_files, run_batch

__all__ = [
    # Row extractors
    "BaseExtractor",
    "RowExtractor",
    "CaseRefExtractor",
    "CombinedClaimExtractor",
    "CombinedState",
    "CaseAccumulator",
    "PossessionScheduleExtractor",
    "SimpleClaimExtractor",
    # Pipeline
    "EXTRACTORS",
    "HearingListParser",
    "BatchSummary",
    "classify_batch",
    "list_input_files",
    "run_batch",
]
