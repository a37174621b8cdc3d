"""Tests for optional research-index wiring in the composition root."""

from unittest.mock import Mock, patch

from src.application.use_cases.retrieve_documents import RetrieveResearchDocumentsUseCase
from src.infrastructure.entrypoints.composition import load_research_retrieval

LOAD_PATH = "src.infrastructure.entrypoints.composition.FAISSVectorStore.load"


class TestLoadResearchRetrieval:
    """Test that a missing or broken index disables document search."""

    @patch(LOAD_PATH)
    def test_missing_directory_disables_search(self, mock_load, tmp_path):
        assert load_research_retrieval(str(tmp_path / "missing")) is None
        mock_load.assert_not_called()

    @patch(LOAD_PATH)
    def test_existing_index_is_loaded(self, mock_load, tmp_path):
        mock_load.return_value = Mock()

        result = load_research_retrieval(str(tmp_path))

        mock_load.assert_called_once_with(str(tmp_path))
        assert isinstance(result, RetrieveResearchDocumentsUseCase)

    @patch(LOAD_PATH)
    def test_unreadable_index_disables_search(self, mock_load, tmp_path):
        mock_load.side_effect = RuntimeError("corrupt index")

        assert load_research_retrieval(str(tmp_path)) is None
